"""Agent configuration parsed from ``key=value`` tokens."""
from dataclasses import dataclass, field, fields
from typing import Optional


DEFAULT_ALPHA = 0.1


@dataclass
class AgentConfig:
    """Typed agent options.

    Recognised keys are coerced to their field types; any other key is
    kept verbatim in ``extras``.
    """
    name: str = "unknown"
    role: str = "unknown"
    load: Optional[str] = None
    save: Optional[str] = None
    alpha: float = DEFAULT_ALPHA
    seed: Optional[int] = None
    extras: dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, args: str = "", **defaults) -> "AgentConfig":
        """
        Parse space-separated ``key=value`` tokens.

        Args:
            args: e.g. ``"alpha=0.05 load=weights.bin"``
            **defaults: field values applied before the tokens

        Raises:
            ValueError: if a recognised key has a value of the wrong type
        """
        config = cls(**defaults)
        for token in args.split():
            key, _, value = token.partition("=")
            config.set(key, value)
        return config

    def set(self, key: str, value: str) -> None:
        if key == "alpha":
            self.alpha = float(value)
        elif key == "seed":
            self.seed = int(float(value))
        elif key in ("name", "role", "load", "save"):
            setattr(self, key, value)
        else:
            self.extras[key] = value

    def property(self, key: str) -> str:
        """String value of a key.

        Raises:
            KeyError: if the key was never set
        """
        if key in self.extras:
            return self.extras[key]
        if key in {f.name for f in fields(self)} and key != "extras":
            value = getattr(self, key)
            if value is not None:
                return str(value)
        raise KeyError(key)

    def __contains__(self, key: str) -> bool:
        try:
            self.property(key)
        except KeyError:
            return False
        return True

"""TD(0) learning player over after-states."""
from threes.agents.weight import WeightAgent
from threes.fields.actions import Action, Direction
from threes.fields.board import ILLEGAL, Board
from threes.utils.trajectory import Trajectory, terminal_step


class TDLAgent(WeightAgent):
    """Greedy after-state player that learns from its own episodes.

    Each ``take_action`` records the chosen after-state; ``update_episode``
    replays the record backward with one-step TD targets:

        error = exact - (value - reward)
        exact = reward + V'(after)

    where ``exact`` starts at 0 for the terminal state and ``V'`` is the
    after-state value returned by the update.
    """

    def __init__(self, args: str = "", **kwargs):
        kwargs.setdefault("name", "tdl")
        kwargs.setdefault("role", "player")
        super().__init__(args, **kwargs)
        self.trajectory = Trajectory()

    def open_episode(self) -> None:
        self.trajectory.clear()

    def close_episode(self) -> None:
        if self.alpha > 0:
            self.update_episode()
        else:
            self.trajectory.clear()

    def take_action(self, before: Board) -> Action:
        best = None
        for op in Direction:
            after = before.copy()
            reward = after.slide(op)
            if reward == ILLEGAL:
                continue
            value = reward + self.estimate(after)
            if best is None or value > best[0]:
                best = (value, op, after, reward)

        if best is None:
            self.trajectory.push(*terminal_step(before))
            return Action()

        value, op, after, reward = best
        self.trajectory.push(before.copy(), after, op, float(reward), value)
        return Action.slide(op)

    def update_episode(self) -> None:
        """Backward TD pass over the recorded episode."""
        self.trajectory.pop()
        exact = 0.0
        for step in self.trajectory.backward():
            error = exact - (step.value - step.reward)
            exact = step.reward + self.update(step.after, self.alpha * error)

"""Setup script for threes-tdl package."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="threes-tdl",
    version="0.1.0",
    description="TD-learning n-tuple player for a Threes-style sliding tile game",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["threes", "threes.*", "training", "training.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "Topic :: Games/Entertainment :: Puzzle Games",
    ],
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.20.0",
        "gymnasium>=0.28.0",
        "tqdm>=4.60.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "black>=21.0",
            "flake8>=3.8",
            "mypy>=0.900",
        ],
    },
    entry_points={
        "console_scripts": [
            "threes-train=training.reinforcement_learning.train:main",
            "threes-test=training.reinforcement_learning.test:main",
        ],
    },
)

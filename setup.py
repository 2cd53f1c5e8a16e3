"""
Setup script for rails-tutor.

rails-tutor keeps the notes produced by an AI tutoring assistant while it
teaches Ruby on Rails internals:

1. Tutorials - one markdown file per concept, with YAML front matter
2. Logs - Q&A and quiz history appended to each tutorial
3. Learner profile - interview transcripts used to personalize teaching

The 'rails-tutor' command is the entry point.
"""

from setuptools import find_packages, setup

setup(
    name="rails-tutor",
    version="0.1.0",
    description="Tutorial record store for an AI-driven Rails learning assistant",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="rails-tutor",
    packages=find_packages(include=["rails_tutor", "rails_tutor.*"]),
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.12.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Front matter
        "PyYAML>=6.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "rails-tutor=rails_tutor.cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: Education",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="learning spaced-repetition cli education markdown front-matter",
)

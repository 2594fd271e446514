"""
Setup script for speakflow-core.

speakflow-core is the review engine behind the SpeakFlow language-learning
app. It owns three things:

1. Scheduling - SM-2 spaced repetition for every studied item
2. Quizzes - multiple-choice question sets with distractors
3. Sessions - scored quiz and flashcard runs over a filtered pool

The 'speakflow' command exposes the engine from the terminal.
"""

from setuptools import find_packages, setup

setup(
    name="speakflow-core",
    version="1.0.0",
    description="Spaced-repetition scheduler and assessment sessions for SpeakFlow",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="SpeakFlow",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "hypothesis>=6.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "speakflow=speakflow.cli:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="learning spaced-repetition sm2 flashcards quiz language",
)

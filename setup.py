"""
Setup script for asvab-adaptive-engine.

The adaptive engine picks the next practice questions for a learner. It
serves three roles:

1. Sequencing - Ordered, difficulty-paced question lists per topic
2. Prioritization - Ranking test categories by how much work they need
3. Planning - Multi-topic learning paths with milestones

The 'asvab-adaptive' command runs the engine offline against a JSON fixture.
"""

from setuptools import find_packages, setup

setup(
    name="asvab-adaptive-engine",
    version="1.0.0",
    description="Adaptive question sequencing and mastery estimation for ASVAB practice",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="Right Learning",
    packages=find_packages(include=["src", "src.*"]),
    py_modules=["config"],
    python_requires=">=3.11",
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
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "asvab-adaptive=src.cli.adaptive_cli:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="learning adaptive asvab education mastery",
)

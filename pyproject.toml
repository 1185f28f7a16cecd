[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aidocs"
version = "0.1.0"
description = "Keep AI agent memory files on a dedicated Git branch and worktree, with simple push and pull."
requires-python = ">=3.11"
keywords = ["git", "worktree", "ai", "memory", "documentation", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control :: Git",
]
dependencies = [
    "click>=8.1",
    "pyyaml>=6.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
]

[project.scripts]
ai-docs = "aidocs.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["aidocs"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true

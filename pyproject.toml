[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mediatheque"
version = "0.1.0"
description = "A small multimedia library manager (photos, videos, films and collections) served over a line-based TCP protocol."
requires-python = ">=3.10"
dependencies = []
keywords = ["multimedia", "media", "photo", "video", "film", "collection", "tcp", "server"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mediatheque-server = "mediatheque.app:main"
mediatheque-client = "mediatheque.client:main"

[tool.hatch.build.targets.wheel]
packages = ["mediatheque"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

#!/usr/bin/env python
import os

from setuptools import setup

here = os.path.abspath(os.path.dirname(__file__))


def read_requirements(filename: str = "requirements.txt"):
    with open(os.path.join(here, filename)) as fp:
        return [row.strip() for row in fp if row.strip()]


about = {}
with open(os.path.join(here, "composite_stream", "__init__.py"), "r") as f:
    exec(f.read(), about)


def readme():
    with open(os.path.join(here, "README.md")) as f:
        return f.read()


setup(
    name="composite_stream",
    version=about["VERSION"],
    description="Read, write and seek a sequence of byte sources as one stream",
    long_description=readme(),
    long_description_content_type="text/markdown",
    license="BSD",
    python_requires=">=3.9",
    packages=[
        "composite_stream",
        "composite_stream.commands",
    ],
    entry_points="""
      [console_scripts]
      composite_stream=composite_stream.commands.__main__:main
      """,
    install_requires=read_requirements(),
    extras_require={
        "test": read_requirements("requirements-dev.txt"),
    },
)

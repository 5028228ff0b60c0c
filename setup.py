"""Install the f1telem package from python/."""

from setuptools import setup, find_packages

setup(
    name="f1telem",
    version="0.1.0",
    description="Decoder and tooling for the F1 game UDP telemetry feed",
    package_dir={"": "python"},
    packages=find_packages("python"),
    python_requires=">=3.11",
    install_requires=["numpy"],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": ["f1telem=f1telem.cli:main"],
    },
)

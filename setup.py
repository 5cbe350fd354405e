from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

setup(
    name="dota_combatlog",
    version="0.1.0",
    description="Parser and analyzer for Dota combat logs",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["dota_combatlog", "dota_combatlog.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "dota-combatlog=dota_combatlog.cli:main",
        ],
    },
)

from setuptools import setup, find_packages

setup(
    name="fdentry",
    version="0.1.0",
    description="Zero-copy parser for FreeDesktop entry files",
    author="Ty",
    license="GPLv3",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    entry_points={
        "console_scripts": [
            "fdentry=fdentry.main:main",
        ],
    },
)

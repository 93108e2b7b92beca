"""
chetutils

Null-safe value helpers, Chinese-locale formatting and small automations.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="chet-utils",
    version="0.1.0",
    author="chetutils Contributors",
    description="Null-safe value helpers, Chinese-locale formatting and small automations",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Natural Language :: Chinese (Simplified)",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Software Development :: Libraries",
    ],
    python_requires=">=3.10",
    install_requires=[
        "charset-normalizer>=3.0",
        "lunardate>=0.2",
        "tzdata",
    ],
    extras_require={
        "automation": [
            "selenium>=4.10",
            "pynput>=1.7",
        ],
        "dev": [
            "pytest>=7.0",
            "selenium>=4.10",
        ],
    },
    entry_points={
        "console_scripts": [
            "chetutils=chetutils.cli.main:main",
        ],
    },
)

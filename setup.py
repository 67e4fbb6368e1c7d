from setuptools import setup, find_packages


setup(
    name="mailzip",
    version="0.1",
    packages=find_packages(include=["mailzip", "mailzip.*"]),
    description="Packs text documents such as .eml messages into a stored ZIP archive.",
    author="vercingetorx",
    install_requires=[],
    entry_points={
        "console_scripts": [
            "mailzip=mailzip.cli:main",
        ]
    },
)

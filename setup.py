from setuptools import setup, find_namespace_packages

setup(
    name="applife",
    version="0.1.0",
    description="Application and screen lifecycle state machines with a host simulator",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["core", "lifecycle", "player"]),
    py_modules=["main", "config"],
    python_requires=">=3.10",
    install_requires=[
        "PyYAML>=6.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "applife=main:main",
        ],
    },
)

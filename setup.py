from setuptools import setup, find_packages

setup(
    name="connect-four",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "connect_four.interfaces": ["templates/*.html"],
    },
    install_requires=[
        "numpy",
        "gymnasium",
        "flask",  # browser interface
    ],
    extras_require={
        "test": ["pytest"],
    },
)

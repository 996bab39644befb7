from setuptools import setup, find_packages

setup(
    name="strassen-matrix",
    version="1.0.0",
    packages=find_packages(include=["strassen_matrix", "strassen_matrix.*"]),
    install_requires=["numpy>=1.19.0"],
    extras_require={
        "test": ["pytest>=7.0"],
        "examples": ["matplotlib>=3.3.0"],
    },
    entry_points={
        "console_scripts": ["strassen-matrix=strassen_matrix.cli:main"],
    },
    python_requires=">=3.8",
)

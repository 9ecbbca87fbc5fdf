from setuptools import setup, find_packages

setup(
    name="LMSim",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "pandas",
        "matplotlib",
        "scipy",
    ],
    extras_require={
        "progress": ["tqdm"],
        "test": ["pytest", "scikit-learn", "tqdm"],
    },
    description="Linear model simulation and microarray expression preprocessing for teaching",
)

from setuptools import setup, find_packages

setup(
    name="areascan_sim",
    version="0.1.0",
    author="pabloramesc",
    url="https://github.com/pabloramesc/uav-swarm-sim",
    packages=find_packages(include=["areascan_sim", "areascan_sim.*"]),
    python_requires=">=3.11",
    install_requires=[
        "numpy",
        "matplotlib",
        "shapely>=2.0",
        "requests",
    ],
    extras_require={"test": ["pytest"]},
)

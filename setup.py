from setuptools import setup, find_packages

setup(
    name="fuzzy_infer",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "pandas",
        "matplotlib",
        "simpful"
    ],
    extras_require={
        "test": ["pytest"],
    },
    description="Fuzzy sets, weighted rules, priority inference and defuzzification",
    keywords="fuzzy, inference, defuzzification, fuzzy rules",
    python_requires=">=3.8",
)

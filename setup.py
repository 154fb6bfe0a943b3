from setuptools import find_packages, setup


setup(
    name="gh-pagerank",
    version="0.1.0",
    description="Depth-bounded PageRank over the GitHub follow graph",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "httpx>=0.24.0",
        "pydantic>=2.0.0",
        "spacy>=3.5.0",
        "networkx>=3.0",
        "numpy>=1.23",
    ],
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "gh-pagerank=gh_pagerank.cli:main",
        ],
    },
)

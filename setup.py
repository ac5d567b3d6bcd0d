#!python

import os.path

from setuptools import find_packages, setup

# Read the version without importing the package and its dependencies
version_ns = {}
with open(os.path.join("src", "qualfsa", "version.py")) as f:
    exec(f.read(), version_ns)

if __name__ == "__main__":
    setup(
        name="QualFSA",
        version=version_ns["versionstring"](),
        package_dir={"": "src"},
        packages=find_packages("src"),
        description="Finite automata for conjunctions of starts-with, ends-with and contains qualities.",
        long_description=open("README.md").read(),
        long_description_content_type="text/markdown",
        license="Two-clause BSD license",
        keywords="automaton dfa kmp product construction pattern",
        zip_safe=True,
        python_requires=">=3.8",
        install_requires=[
            "cached-property==1.5.2",
            "loguru==0.7.2",
        ],
        extras_require={
            "test": [
                "pytest==8.3.2",
            ],
        },
        entry_points={
            "console_scripts": ["qualfsa = qualfsa.cli:main"],
        },
        classifiers=[
            "Programming Language :: Python :: 3",
            "Development Status :: 3 - Alpha",
            "Intended Audience :: Developers",
            "License :: OSI Approved :: BSD License",
            "Natural Language :: English",
            "Operating System :: OS Independent",
            "Programming Language :: Python :: 3.8",
            "Programming Language :: Python :: 3.9",
            "Programming Language :: Python :: 3.10",
            "Programming Language :: Python :: 3.11",
            "Programming Language :: Python :: 3.12",
            "Topic :: Software Development :: Libraries :: Python Modules",
            "Topic :: Text Processing",
        ],
    )

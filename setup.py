from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="gotestreport",
    version="0.3.0",
    description="HTML reports from `go test -json` output.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"gotestreport": ["templates/*.html"]},
    python_requires=">=3.9",
    install_requires=["jinja2>=3.0", "markupsafe>=2.0", "pyyaml>=6.0"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["gotestreport=gotestreport.cli:main"]},
)

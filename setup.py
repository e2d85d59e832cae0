from setuptools import setup, find_packages
from pathlib import Path

readme_path = Path(__file__).parent / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")
else:
    long_description = "Recursive JSON Schema validation engine returning complete, ordered lists of structured errors."

setup(
    name="schemaguard",
    version="0.4.0",
    description="Recursive JSON Schema validation engine for draft 3 and draft 4 style schemas",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"schemaguard.messages": ["*.yaml"]},
    include_package_data=True,
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        "pyyaml>=6.0",
        "jinja2>=3.0",  # Message templates and describedby href templates
        "jsonschema>=4.20.0",  # Metaschema checks (schemaguard check)
        "fsspec>=2023.1.0",  # Remote $ref fetching
        "typer>=0.9.0",
        "pydantic>=2.0.0",  # ValidatorSettings
    ],
    entry_points={
        "console_scripts": [
            "schemaguard=schemaguard.cli:main",
        ],
    },
    extras_require={
        "dev": [
            "pytest",
            "coverage",
            "hypothesis",
        ],
    },
)

# DEPENDENCIES
from setuptools import setup
from setuptools import find_packages


# Read the long description from README.md if it exists

readme_path = "README.md"

try:
    with open(readme_path, "r", encoding="utf-8") as fh:
        long_description = fh.read()

except FileNotFoundError:
    long_description = "Contract clause risk analysis and document comparison engine"

setup(name                          = "legalease-contract-engine",
      version                       = "1.0.0",
      description                   = "Clause segmentation, dual risk scoring, glossary extraction and clause-type-aware comparison of legal contracts.",
      long_description              = long_description,
      long_description_content_type = "text/markdown",
      packages                      = find_packages(exclude = ["tests", "tests.*"]),
      classifiers                   = ["Development Status :: 4 - Beta",
                                       "Intended Audience :: Legal Industry",
                                       "Operating System :: OS Independent",
                                       "Programming Language :: Python :: 3",
                                       "Programming Language :: Python :: 3.11",
                                       "Programming Language :: Python :: 3.12",
                                      ],
      python_requires               = ">=3.11",
      install_requires              = ["pydantic>=2.5.0",
                                       "pydantic-settings>=2.1.0",
                                       "requests>=2.31.0",
                                      ],
      extras_require                = {"dev"       : ["black>=23.10.0", "isort>=5.12.0", "flake8>=6.0.0", "pytest>=7.4.0"],
                                       "openai"    : ["openai>=1.0.0"], # Optional OpenAI support
                                       "anthropic" : ["anthropic>=0.5.0"], # Optional Anthropic support
                                      },
      include_package_data          = True,
     )

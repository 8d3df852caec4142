from setuptools import setup, find_packages

setup(
    name="webmech",
    version="1.0.0",
    description="A scriptable web browser for fetching pages, following links and submitting forms",
    author="Michael Elliott",
    author_email="melliott@anaconda.com",
    url="https://github.com/melliott-anaconda/webmech",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        "requests>=2.26.0",
        "beautifulsoup4>=4.10.0",
        "html2text>=2020.1.16",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "requests-mock>=1.9.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'webmech=webmech.__main__:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
)

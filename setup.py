from setuptools import find_packages, setup  # noqa

extras_require = {
    "test": [
        "mock",
        "pytest",
    ],
}

__version__ = "0.0.0+develop"

setup(
    name="buildinit",
    version=__version__,
    maintainer="buildinit Contributors",
    packages=find_packages(
        include=["buildinit", "buildinit.*"],
        exclude=["docs", "tests*"],
    ),
    include_package_data=True,
    description="Generate image build configs by pairing a project's build files with the images it deploys",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    entry_points={
        "console_scripts": [
            "buildinit=buildinit.clis.main:main",
        ]
    },
    install_requires=[
        # Please maintain an alphabetical order in the following list
        "click>=6.6,<9.0",
        "docker>=4.0.0",
        "mashumaro>=3.9.1",
        "python-json-logger>=2.0.0",
        "pyyaml!=6.0.0,!=5.4.0,!=5.4.1",  # pyyaml is broken with cython 3: https://github.com/yaml/pyyaml/issues/601
        "rich",
        "rich_click",
    ],
    extras_require=extras_require,
    license="apache2",
    python_requires=">=3.9",
    classifiers=[
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development",
        "Topic :: Software Development :: Build Tools",
    ],
)

import io

from setuptools import setup


def file_contents(path):
    with io.open(path, encoding="utf-8") as f:
        return f.read()


def file_lines(path):
    return [line for line in file_contents(path).split("\n")
            if line.strip() and not line.startswith("#")]


setup(
    name="domecho",
    description="Print the node tree of an XML document, with optional DTD "
                "or XML Schema validation",
    long_description=file_contents("README.rst"),
    version="1.0.0",
    packages=["domecho", "domecho.test"],
    package_data={"domecho.test": ["data/*"]},
    python_requires=">=3.8",
    install_requires=file_lines("requirements/install.txt"),
    extras_require={
        "tests": file_lines("requirements/test.txt")
    },
    entry_points={
        "console_scripts": [
            "domecho = domecho.cmdline:main"
        ]
    },
    include_package_data=True,
    license='Apache 2.0',
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Natural Language :: English",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Text Processing :: Markup :: XML",
    ],
    keywords="xml dom dtd xsd schema validation lxml tree"
)

from setuptools import setup, find_packages
import os
import io
from ffiprep.version import __version__

here = os.path.abspath(os.path.dirname(__file__))

# Get the long description from the README file
with io.open(os.path.join(here, "ffiprep", "README.ffiprep.rst"), encoding="utf-8") as ff:
    long_description = ff.read()

setup(
    name="ffiprep",
    version=__version__,
    description="Preprocess C headers into declarations and macros for FFI binding generators",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    python_requires=">=3.9",
    license="GPLv3+",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Code Generators",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13"
    ],
    keywords="c ffi preprocessor headers",
    packages=find_packages(),
    package_data={"": [ff for ff in os.listdir("ffiprep") if ff.startswith("README")]},
    include_package_data=True,
    install_requires=[
        "configargparse>=1.5.3",
        "appdirs>=1.4.4",
    ],
    extras_require={
        "test": ["pytest"],
    },
    test_suite="ffiprep",
    scripts=[ff for ff in os.listdir(".") if ff.startswith("ffiprep-")],
)

import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

with open("biginteger/version.py", "r") as fh:
    version = fh.read().strip().strip('"')

setuptools.setup(
    name="biginteger",
    version=version,
    description="Immutable arbitrary precision integers, sign and magnitude over 32-bit limbs.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(),
    platforms=['any'],
    python_requires=">=3.6",
    extras_require={
        'test': [
            'hypothesis',
            'pytest',
        ],
    },
    # NOTE:  No runtime dependencies.  The test extra is only for the biginteger/test_*.py modules.
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Topic :: Software Development :: Libraries",
    ],
)

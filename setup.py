from setuptools import setup, find_packages

with open("README.md", "r") as fh:
    long_description = fh.read()

with open("requirements.txt", "r") as fh:
    reqs = fh.read()

setup(
    name="endodcm",
    version="0.1.0",
    description="Convert endoscopic capture manifests into typed DICOM attributes.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    install_requires=reqs,
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    extras_require={
        'test': ['pytest>=7.4'],
    },
    entry_points={'console_scripts': ['endodcm = endodcm.cli.__main__:cli',]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "License :: OSI Approved :: Apache Software License",
        "Development Status :: 2 - Pre-Alpha"
    ],
    python_requires='>=3.10',
)

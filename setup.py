# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="filedress",
    version="1.0.0",
    description="Add path headers to source files, strip comments, copy code and scaffold directory trees",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["filedress*"]),
    python_requires=">=3.9",
    install_requires=[
        "requests>=2.28",
        "pyperclip>=1.8",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'filedress=filedress.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)

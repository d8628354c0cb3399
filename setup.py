from setuptools import setup, find_packages


setup(
    name="ufofmt",
    description=("A fast, flexible UFO source formatter with configurable "
                 "indentation and XML declaration quoting."),
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    url="https://github.com/source-foundry/ufofmt",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    entry_points={
        'console_scripts': [
            "ufofmt = ufofmt.cli:main",
        ]
    },
    use_scm_version={
        "write_to": 'src/ufofmt/_version.py',
        "write_to_template": '__version__ = "{version}"',
        "fallback_version": "0.7.2.dev0",
    },
    install_requires=[
        "rich>=10",
    ],
    extras_require={
        "test": ["pytest"],
    },
    license="Apache-2.0",
    platforms=["Any"],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: Apache Software License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Text Processing :: Fonts",
        "Topic :: Multimedia :: Graphics",
    ],
    python_requires='>=3.7',
    zip_safe=False,
)

from setuptools import setup

setup(
    name="subchase",
    version="0.1.0",  # synced with __version__ in subchase.py
    description="Fast DNS subdomain brute force that follows CNAME chains to IPv4 addresses",
    long_description="See project README for details.",
    long_description_content_type="text/markdown",
    author="SubChase contributors",
    license="MIT",
    py_modules=["subchase"],
    packages=["recon"],
    python_requires=">=3.10",
    install_requires=[
        "dnspython",
        "requests",
        "PyYAML",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "subchase = subchase:main"
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Intended Audience :: Information Technology",
        "Topic :: Security",
    ],
)

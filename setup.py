import setuptools

setuptools.setup(
    packages=setuptools.find_packages(exclude=["tests"]),
    name='dynamic-compression',
    version='1.0.0',
    description='Dynamic gzip and Brotli compression of aiohttp responses.',
    long_description='file: README.md',
    classifiers=
    ['Intended Audience :: Developers',
     'Operating System :: OS Independent',
     'Programming Language :: Python :: 3 :: Only',
     'Programming Language :: Python :: 3.9',
     'Programming Language :: Python :: 3.10',
     'Programming Language :: Python :: 3.11',
     'Programming Language :: Python :: 3.12'],
    install_requires=[
        "aiohttp>=3.9,<4",
        "Brotli>=1.0.9",
        "prometheus-client>=0.9",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "pytest-mock",
        ],
    },
)

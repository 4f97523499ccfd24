#!/usr/bin/env python3

from setuptools import setup
import bfstream

setup(
    name = 'bfstream',
    description = bfstream.__doc__.strip(),
    url = 'https://github.com/nul-one/bfstream',
    download_url = 'https://github.com/nul-one/bfstream/archive/'+bfstream.__version__+'.tar.gz',
    version = bfstream.__version__,
    author = bfstream.__author__,
    author_email = bfstream.__author_email__,
    license = bfstream.__licence__,
    packages = [ 'bfstream' ],
    entry_points={
        'console_scripts': [
            'bfstream=bfstream.__main__:main',
        ],
    },
    install_requires = [
        'pycryptodome>=3.9.0',
        'argcomplete>=1.8.2',
    ],
    extras_require = {
        'test': [
            'pytest>=3.0',
        ],
    },
    python_requires=">=3.5",
)

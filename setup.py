from setuptools import setup, find_packages

setup(
    name='bin2c',
    version='0.1.0',
    description='Convert binary files to C array or string literals',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    install_requires=[
        'PyYAML',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'bin2c = bin2c.cli:main',
        ],
    }
)

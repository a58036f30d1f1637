from setuptools import setup, find_packages

setup(
    name='gaiascript',
    version='0.1.0',
    py_modules=['gaia', 'compiler'],
    packages=find_packages(),
    package_data={
        'gaia_core': ['vocabulary.json'],
    },
    install_requires=[
        'lark',
        'pydantic',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'gaia = gaia:main',
        ],
    },
)

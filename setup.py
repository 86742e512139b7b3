from setuptools import setup, find_packages

setup(
    name="speech-text-analysis",
    version="0.1",
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    install_requires=[
        'inflect',
        'pandas',
        'numpy',
        'scipy',
        'matplotlib',
        'seaborn',
        'nltk',
        'textblob',
        'tqdm',
        'python-dotenv'
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'speechfreq=speechfreq.cli:main',
        ],
    },
)

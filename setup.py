from setuptools import setup, find_namespace_packages

setup(
    name='verbump',
    package_dir={'': 'src'},
    packages=find_namespace_packages(where='src', include=['verbump', 'verbump.*']),
    version='0.013',
    description='Bump $VERSION in Perl sources after a release',
    keywords=['release', 'automation', 'version', 'perl', 'CPAN'],
    classifiers=['Development Status :: 3 - Alpha',
                 'Intended Audience :: Developers',
                 'Topic :: Software Development :: Build Tools',
                 'Topic :: Software Development :: Version Control',
                 'Programming Language :: Python :: 3'],
    python_requires='>=3.10',
    install_requires=['docopt', 'rich', 'blinker'],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        "console_scripts": ['verbump = verbump.cli:run_verbump']
    }
)

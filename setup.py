import setuptools

with open('README.md', 'r') as fh:
    long_description = fh.read()

setuptools.setup(
    name='pgacalc',
    version='1.4.0',
    author='PgaCalc Developers',
    description='Deterministic PGA from a weighted ensemble of '
                'ground-motion models',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=setuptools.find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'pgacalc.gmm': ['registry.json'],
        'pgacalc.data': ['gmm.xml', 'gmm-trees.json'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: GNU Affero General Public License v3',
        'Operating System :: OS Independent',
        'Topic :: Scientific/Engineering',
        'Intended Audience :: Science/Research'
    ],
    python_requires='>=3.9',
    install_requires=[
        'setuptools',
        'numpy',
        'shapely>=2.0',
        'lxml'
    ],
    extras_require={
        'oq': ['openquake.engine'],
        'test': ['pytest']
    },
    entry_points={
        'console_scripts': [
            'pgacalc=pgacalc.cli.__main__:pgacalc',
            'pgacalc-tools=pgacalc.cli.__main__:tools'
        ]
    }
)

#!/usr/bin/env python

from setuptools import find_packages, setup


setup(
    name='camfits',
    version='1.0.0',
    description='Read and write single image FITS files from CCD cameras',
    long_description=open('README.rst').read(),
    license='BSD',
    package_dir={'': 'lib'},
    packages=find_packages('lib'),
    python_requires='>=3.8',
    install_requires=['numpy>=1.17'],
    extras_require={'test': ['pytest']},
    zip_safe=False,
    classifiers=[
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: BSD License',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering :: Astronomy',
    ],
)

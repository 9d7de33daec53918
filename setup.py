#!/usr/bin/python3
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages
import os

ROOT = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(ROOT, 'README.md'), 'r', encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='pysteamtoolbox',
    include_package_data=True,
    version='0.1.0',  # Ideally should be same as your GitHub release tag version
    packages=find_packages(include=['pysteamtoolbox', 'pysteamtoolbox.*']),
    description='pysteamtoolbox - A collection of Water and Steam Property Utilities',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='Mark W. Burgoyne',
    author_email='mark.w.burgoyne@gmail.com',
    keywords=['steam', 'water', 'iapws', 'if97', 'thermodynamics'],
    classifiers=[],
    install_requires=[
        'numpy',
        'pandas',
        'tabulate',
        'setuptools'
    ],
    extras_require={
        'test': ['pytest'],
    }
)

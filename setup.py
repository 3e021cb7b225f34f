#!/usr/bin/env python3

import os
from setuptools import setup

directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(directory, 'README.md'), encoding='utf-8') as f:
  long_description = f.read()

setup(name='termbg',
      version='0.5.0',
      description='detect the terminal background color and theme',
      author='Mitchell Goff',
      license='MIT',
      long_description=long_description,
      long_description_content_type='text/markdown',
      packages = ['termbg'],
      classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Environment :: Console",
      ],
      install_requires=[],
      python_requires='>=3.10',
      extras_require={
        'linting': [
          "flake8",
          "pylint",
          "mypy",
          "pre-commit",
        ],
      },
      entry_points={
        'console_scripts': [
          'termbg=termbg.main:main'
        ]
      },
      include_package_data=True)

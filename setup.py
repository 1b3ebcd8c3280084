# -*- coding: utf-8 -*-
from setuptools import setup, find_packages
import sys
if sys.version_info < (3, 8):
    sys.exit('Sorry, Python < 3.8 is not supported.')

with open('./requirements.txt') as f:
    INSTALL_REQUIRES = f.read().splitlines()

setup(
    name="pytgconfig",
    author="AOS ART Team",
    author_email="aos-team-art@redhat.com",
    version="0.0.1-dev",
    description="Generates TestGrid dashboard configuration for OpenShift release-gating and release-informing jobs",
    url="https://github.com/openshift/aos-cd-jobs/",
    license="Apache License, Version 2.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=INSTALL_REQUIRES,
    entry_points={
        'console_scripts': [
            'tgconfig = pytgconfig.__main__:main'
        ]
    },
    test_suite='tests',
    dependency_links=[],
    python_requires='>=3.8',
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
        "Environment :: Console",
        "License :: OSI Approved :: Apache Software License",
        "Topic :: Software Development :: Testing",
    ]
)

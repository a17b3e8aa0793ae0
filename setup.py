# -*- coding: utf-8 -*-

# Imports ###########################################################

import os

from setuptools import find_packages, setup

from discourse_activity.app_config import ENTRYPOINTS

# Functions #########################################################

def package_data(pkg, root_list):
    """Generic function to find package_data for `pkg` under `root`."""
    data = []
    for root in root_list:
        for dirname, _, files in os.walk(os.path.join(pkg, root)):
            for fname in files:
                data.append(os.path.relpath(os.path.join(dirname, fname), pkg))

    return {pkg: data}


# Main ##############################################################

setup(
    name='xblock-discourse-activity',
    version='0.1.0',
    description='XBlock - Discourse activity with solo, group and collaborative phases',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'Django>=3.2',
        'lazy>=1.1',
        'WebOb>=1.6',
        'pytz',
        'XBlock>=1.2.2',
        'web-fragments>=0.3.2',
        'xblock-utils>=0.9',
    ],
    extras_require={
        'test': [
            'pytest',
            'mock',
            'ddt',
            'freezegun',
        ],
    },
    entry_points={
        'xblock.v1': ENTRYPOINTS
    },
    package_data=package_data("discourse_activity", ["templates", "public"]),
)

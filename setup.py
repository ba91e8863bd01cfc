#!/usr/bin/env python

import os
import re

from setuptools import find_packages, setup

README = open(
    os.path.join(os.path.dirname(__file__), 'README.rst'), encoding='utf-8'
).read()


def is_requirement(line):
    """
    Return True if the requirement line is a package requirement;
    that is, it is not blank, a comment, a URL, or an included file.
    """
    return line and not line.startswith(('-r', '#', '-e', 'git+', '-c'))


def load_requirements(*requirements_paths):
    """
    Load all requirements from the specified requirements files.
    Returns a list of requirement strings.
    """
    requirements = set()
    for path in requirements_paths:
        with open(os.path.join(os.path.dirname(__file__), path)) as reqs:
            requirements.update(
                line.split('#')[0].strip() for line in reqs
                if is_requirement(line.strip())
            )
    return sorted(requirements)


def get_version(*file_paths):
    """
    Extract the version string from the file at the given relative path fragments.
    """
    filename = os.path.join(os.path.dirname(__file__), *file_paths)
    with open(filename) as version_file:
        version_match = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]", version_file.read(), re.M)
    if version_match:
        return version_match.group(1)
    raise RuntimeError("Unable to find version string.")


VERSION = get_version("lus", "__init__.py")


setup(
    name='lus-assessment',
    version=VERSION,
    description='Answer evaluation and assessment aggregation for read-aloud comprehension exercises',
    license='AGPL',
    long_description=README,
    long_description_content_type='text/x-rst',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Framework :: Django',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: GNU Affero General Public License v3',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
    ],
    packages=find_packages(include=['lus*'], exclude=['*.test', '*.tests']),
    include_package_data=True,
    install_requires=load_requirements('requirements/base.in'),
    extras_require={
        'test': load_requirements('requirements/test.in'),
    },
)

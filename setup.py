from setuptools import setup

import mockreduce as distmeta


CLASSIFIERS = [
    'Intended Audience :: Developers',
    'License :: OSI Approved :: BSD License',
    'Programming Language :: Python',
    'Programming Language :: Python :: 3',
    'Framework :: Django',
    'Topic :: Database',
    'Topic :: Software Development :: Testing :: Mocking',
    'Topic :: Software Development :: Libraries :: Python Modules',
    'Operating System :: OS Independent',
]

packages = [
    'mockreduce',
]

setup(
    name='django-mongodb-mockreduce',
    version='.'.join(map(str, distmeta.__version__)),
    author=distmeta.__author__,
    author_email=distmeta.__contact__,
    url=distmeta.__homepage__,
    license='2-clause BSD',
    description="In-memory MongoDB Map/Reduce test double for Django "
                "and PyMongo",
    install_requires=['pymongo', 'django'],
    packages=packages,
    include_package_data=True,
    classifiers=CLASSIFIERS,
    test_suite='tests',
)

#!/usr/bin/env python3

from setuptools import setup

setup(
    name='todolist',
    version='0.0.2',
    description='A terminal-based todo list for nerds.',
    author='The todolist authors',
    license='MIT',
    python_requires='>=3.8',
    packages=['todolist'],
    install_requires=[
        'pyyaml>=5.4',
        'rich>=10.2'
    ],
    extras_require={
        'test': ['pytest>=7.0']
    },
    include_package_data=True,
    entry_points={
        'console_scripts': 'todolist=todolist.todolist:main'
    },
    keywords='cli todo utility',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: End Users/Desktop',
        'Natural Language :: English',
        'Operating System :: POSIX',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: 3.8',
        'Topic :: Office/Business',
        'Topic :: Utilities'
    ]
)

from setuptools import setup

APP = 'sshdeck'

setup(
    name=APP,
    version='0.3.0',
    description='Keep ~/.ssh/config as an editable, tagged host list',
    packages=['sshdeck', 'sshdeck.tui'],
    python_requires='>=3.9',
    install_requires=[
        'textual>=0.86',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'sshdeck = sshdeck.cli:main',
            'sshdeck-tui = sshdeck.tui:main',
        ],
    },
)

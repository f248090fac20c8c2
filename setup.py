from setuptools import setup

setup(
    name='game_of_life',
    version='0.2',
    package_dir={'': 'src'},
    py_modules=['conway', 'patterns', 'visualize', 'life'],
    python_requires='>=3.8',
    install_requires=['numpy'],
    extras_require={'test': ['pytest']},
    entry_points={
        'console_scripts': ['game-of-life=life:main'],
    },
)

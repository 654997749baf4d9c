import os
import os.path
import setuptools # type: ignore

root_path = os.path.dirname(__file__)

with open(os.path.join(root_path, "README.md"), "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="fringeworld",
    version="0.1.0",
    author="Fringe Tactics contributors",
    description="Fringeworld: deterministic procedural galaxy generation for a campaign-driven tactics game.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(where="src"),
    package_dir={'': 'src'},

    package_data={
        'fringeworld': ['py.typed'],
        'fringeworld.data': ['*.toml'],
    },
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    install_requires=[
        "numpy",
        "numba",
        "rtree",
        "toml",
        "msgpack",
        "graphviz",
        "tqdm",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    python_requires='>=3.10',
    entry_points={
        'console_scripts': [
            'fringe_galaxy = fringeworld.generate.core:main',
        ],
    },
)

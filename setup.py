from setuptools import setup

setup(
    name="pcdm_modelling",
    version="0.1.0",
    packages=["pcdm_modelling", "pcdm_modelling.scripts"],
    python_requires=">=3.11",
    install_requires=[
        "numpy",
        "pandas",
        "scipy",
        "typer",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "compute-displacement=pcdm_modelling.scripts.compute_displacement:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)

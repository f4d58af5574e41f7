from mypyc.build import mypycify
from setuptools import setup

setup(
    name="ringint",
    version="0.1.0",

    # Only the arithmetic core is compiled. ringint/__init__.py and ringint/lagrange.py import sympy,
    #   which ships no type information, so they stay interpreted and are installed as plain .py files.
    packages=["ringint"],

    ext_modules=mypycify([
        "ringint/rounding.py",
        "ringint/euclid.py",
        "ringint/gaussian.py",
        "ringint/quat.py",
    ]),

    python_requires=">=3.9",
    install_requires=["sympy"],
    extras_require={"test": ["pytest"]},

    license="MIT",
)

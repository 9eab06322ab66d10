# setup.py
from setuptools import setup, find_packages
import os
import re

# Single source of truth for the version
with open(os.path.join("lispy", "__init__.py"), encoding="utf-8") as f:
    version = re.search(r'^__version__ = "([^"]+)"', f.read(), re.M).group(1)

setup(
    name="lispy",
    version=version,
    description="A small Lisp with first-class Q-expressions, partial application and value-based errors",
    python_requires=">=3.10",
    packages=find_packages(include=["lispy", "lispy.*", "lispy_lsp", "lispy_lsp.*"]),
    package_data={"lispy": ["prelude/*.lspy"]},
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "lispy=lispy.repl:main",
            "lispy-ls=lispy_lsp.server:main",
        ],
    },
    zip_safe=False,
)

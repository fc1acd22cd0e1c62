"""
lazypy: Memoized Lazy Cells with a Trampolined Evaluator

Deferred computations composed with map / flat_map and evaluated by an
explicit-stack interpreter:
1. LazyCell with path-compressing memoization
2. Trampoline evaluator (no recursion-limit failures on deep chains)
3. Self-referential cells via recursive()
4. Memoized recursive resolvers via build()
"""

from setuptools import setup, find_packages

setup(
    name="lazypy",
    version="1.0.0",
    description="Memoized lazy cells with a trampolined evaluator",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="lazypy developers",
    python_requires=">=3.10",
    packages=find_packages(include=["lazypy", "lazypy.*"]),
    install_requires=[],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-benchmark>=4.0",
            "tabulate>=0.9",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Libraries",
    ],
)

from setuptools import setup, find_packages

setup(
    name="axauto",
    version="1.0.0",
    packages=find_packages(include=["axauto", "axauto.*"]),
    install_requires=[
        "pyyaml>=5.4",
        "jsonschema>=4.0.0",
        "pyobjc-framework-ApplicationServices>=9.0; sys_platform == 'darwin'",
        "pyobjc-framework-Quartz>=9.0; sys_platform == 'darwin'",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    package_data={
        "axauto": ["schemas/*.json"],
    },
    entry_points={
        "console_scripts": [
            "axauto=axauto.cli:main",
        ],
    },
)

from setuptools import find_packages, setup

setup(
    name="manifest-copier",
    version="0.1.0",
    description="Manifest-driven batch file copying with undo",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={"test": ["pytest>=7.0"]},
    entry_points={"console_scripts": ["manifest-copier=manifest_copier.main:main"]},
)

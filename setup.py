from pathlib import Path
from setuptools import setup, find_packages


def read_readme() -> str:
    readme_path = Path(__file__).resolve().parent / "README.md"
    return readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""


setup(
    name="desblock",
    version="1.0.0",
    packages=find_packages(include=["desblock", "desblock.*"]),
    install_requires=[
        "cryptography>=41.0.0,<43",
        "numpy>=1.24.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "desblock=desblock.main:main",
            "des-encrypt=desblock.main:encrypt_main",
            "des-decrypt=desblock.main:decrypt_main",
        ],
    },
    python_requires=">=3.10",
    description="DES block cipher with a zero/PKCS#7 padded ECB file codec",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
)

import re

from setuptools import find_packages, setup

with open("src/ethsig/__about__.py", encoding="utf-8") as f:
    version = re.search(r'^__version__ = "([^"]+)"', f.read(), re.M).group(1)

if __name__ == "__main__":
    setup(
        name="ethsig",
        version=version,
        description="Ethereum typed-data (EIP-712) signing, personal_sign, EIP-7702 and NaCl encryption",
        packages=find_packages(where="src"),
        package_dir={"": "src"},
        python_requires=">=3.10",
        install_requires=["PyNaCl>=1.5"],
        extras_require={"test": ["pytest>=7"]},
    )

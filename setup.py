from setuptools import setup, find_packages

setup(
    name="courtscore",
    version="0.1",
    packages=find_packages(exclude=["tests"]),
    install_requires=[
        "streamlit>=1.37",
        "pandas",
        "requests",
        "qrcode",
        "pillow",
    ],
    extras_require={
        "test": ["pytest"],
    },
)

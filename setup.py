from setuptools import setup, find_packages

setup(
    name="cinemind",
    version="1.0.0",
    author="Varun Israni",
    description="Multi-agent film package production pipeline",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["app"],
    include_package_data=True,
    install_requires=[
        "fastapi",
        "uvicorn",
        "python-dotenv",
        "pandas",
        "httpx",
        "tenacity",
        "google-genai",
        "streamlit",
        "pymupdf",
        "python-docx",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "cinemind-backend=cinemind.backend.server:main",
        ],
    },
    python_requires=">=3.9",
)

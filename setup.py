from setuptools import setup, find_packages

setup(
    name="speedline",
    version="0.1.0",
    description="Screenshot timelines and visual histograms from Chrome DevTools traces",
    author="speedline contributors",
    python_requires=">=3.11",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        # Core deps (minimum versions)
        "python-dotenv>=1.0.0",
        "click>=8.1.7",
        "rich>=13.7.0",

        # Async and utilities
        "aiofiles>=23.2.1",
        "structlog>=23.2.0",

        # Image decoding and histograms
        "Pillow>=11.1.0",
        "numpy>=1.26.4",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "pytest-asyncio>=0.21.1",
            "pytest-cov>=4.1.0",
            "black>=23.12.1",
            "flake8>=6.1.0",
            "mypy>=1.7.1",
        ],
    },
    entry_points={
        "console_scripts": [
            "speedline=speedline.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3.11",
        "Topic :: Software Development :: Testing",
    ],
)

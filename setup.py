from setuptools import find_packages, setup

setup(
    name="library-services",
    version="0.1.0",
    description="User and Book services for the library backend, plus their shared package",
    author="Library Team",
    author_email="team@library.dev",
    packages=(
        find_packages(where="shared-lib", exclude=["tests", "tests.*"])
        + find_packages(where="user-service/src")
        + find_packages(where="book-service/src")
    ),
    package_dir={
        "shared": "shared-lib/shared",
        "user_service": "user-service/src/user_service",
        "book_service": "book-service/src/book_service",
    },
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.110.0",
        "uvicorn[standard]>=0.27.0",
        "pydantic>=2.5.0,<3.0.0",
        "pydantic-settings>=2.1.0",
        "sqlalchemy[asyncio]>=2.0.31,<3.0.0",
        "psycopg[binary]>=3.1.0",
        "httpx>=0.27.0",
        "python-jose[cryptography]>=3.3.0",
        "passlib[bcrypt]>=1.7.4",
        "bcrypt>=4.0.1,<4.1",
        "slowapi>=0.1.9",
        "email-validator>=2.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0.0",
            "pytest-asyncio>=0.23.0",
            "aiosqlite>=0.19.0",
        ],
    },
)

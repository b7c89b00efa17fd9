from setuptools import setup, find_packages

setup(
    name='metalctl',
    version='0.1.0',
    packages=find_packages(exclude=['metalctl.tests']),
    include_package_data=True,
    install_requires=[
        'typer',
        'fastapi',
        'uvicorn',
        'pydantic>=2',
        'pyyaml',
        'python-dotenv',
        'requests'
    ],
    extras_require={
        'dev': [
            'pytest',
            'httpx',
            'jsonschema',
        ],
    },
    entry_points={
        'console_scripts': [
            'metalctl=metalctl.cli:app'
        ]
    },
    description='Bare-metal provisioning control plane: network boot artifacts and etcd bootstrap plans',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
)

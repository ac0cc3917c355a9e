"""Setup script for Manifest MCP Server."""

from setuptools import setup, find_packages
import os

# Read the README file
def read_readme():
    readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_path):
        with open(readme_path, 'r', encoding='utf-8') as f:
            return f.read()
    return "Manifest MCP Server - serves file-based prompts and resources over MCP stdio"

setup(
    name='manifest-mcp-server',
    version='1.0.0',
    description='MCP (Model Context Protocol) server for file-based prompt and resource manifests',
    long_description=read_readme(),
    long_description_content_type='text/markdown',
    author='Manifest MCP Server Team',
    author_email='dev@example.com',

    packages=find_packages(exclude=['tests', 'tests.*']),
    py_modules=['mcp_manifest_server'],
    python_requires='>=3.10',
    install_requires=[
        'mcp>=1.2.0,<2',
        'pydantic>=2.0.0',
        'click>=8.1.0',
        'python-dotenv>=1.0.0',
        'pyyaml>=6.0',
    ],

    extras_require={
        'toml': ['tomli>=2.0.0'],
        'dev': [
            'pytest>=7.4.0',
            'pytest-cov>=4.1.0',
            'black>=23.0.0',
            'flake8>=6.0.0',
            'mypy>=1.5.0',
        ],
        'test': [
            'pytest>=7.4.0',
        ],
    },

    entry_points={
        'console_scripts': [
            'manifest-mcp-server=manifest_mcp_server.cli:cli',
        ],
    },

    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: Libraries',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],

    keywords='mcp model-context-protocol prompts resources json-rpc',

    include_package_data=True,
    zip_safe=False,
)

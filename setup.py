import os
import importlib.util

from setuptools import setup

dirname = os.path.dirname(__file__)
path_version = os.path.join(dirname, "evpromise/_version.py")
spec = importlib.util.spec_from_file_location('version', path_version)
version = importlib.util.module_from_spec(spec)
spec.loader.exec_module(version)

name = 'evpromise'
author = "Anthony Johnson"
license = 'MIT'
version = version.__version__
install_requires = ["aplus", "pydantic>=2", "pydantic-settings>=2", "pyyaml", "rich", "nest-asyncio>=1.3.3"]

setup(name=name,
      version=version,
      description='Evented promises: chain asyncio driven callbacks and catch the first failure',
      author=author,
      install_requires=install_requires,
      license=license,
      packages=['evpromise'],
      zip_safe=False,
      extras_require={
          'test': [
              "pytest",
              "pytest-asyncio",
              "pytest-timeout",
          ]
      },
      entry_points={
          'console_scripts': ['evpromise = evpromise.__main__:main'],
      }
      )

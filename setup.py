# coding: utf-8
from setuptools import setup, find_packages
from codecs import open
from os import path
import sys

from readview import __version__ as readview_version
here = path.abspath(path.dirname(__file__))

with open(path.join(here, "DESCRIPTION.md"), encoding="utf-8") as description:
	description = long_description = description.read()

	name="readview"
	version = readview_version

	if sys.version_info.major != 3:
		raise EnvironmentError("""{toolname} is a python module that requires python3, and is not compatible with python2.""".format(toolname=name))

	setup(
		name=name,
		version=version,
		description="Filter aligned reads by SAM flag bitmasks.",
		long_description=long_description,
		long_description_content_type="text/markdown",
		license="MIT",
		classifiers=[
			"Development Status :: 4 - Beta",
			"Topic :: Scientific/Engineering :: Bio-Informatics",
			"License :: OSI Approved :: MIT License",
			"Operating System :: POSIX :: Linux",
			"Programming Language :: Python :: 3",
		],
		zip_safe=False,
		keywords="alignment sam bam parquet flag filter",
		packages=find_packages(exclude=["tests", "tests.*"]),
		python_requires=">=3.8",
		install_requires=[
			"pandas",
			"pyarrow",
			"pysam",
		],
		extras_require={
			"test": [
				"pytest",
			],
		},
		entry_points={
			"console_scripts": [
				"readview=readview.__main__:main",
			],
		},
		package_data={},
		include_package_data=True,
		data_files=[],
	)

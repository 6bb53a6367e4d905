#
# Licensed to the Apache Software Foundation (ASF) under one or more
# contributor license agreements.  See the NOTICE file distributed with
# this work for additional information regarding copyright ownership.
# The ASF licenses this file to You under the Apache License, Version 2.0
# (the "License"); you may not use this file except in compliance with
# the License.  You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#

"""
Setup script for shardmark package.
"""

from setuptools import find_packages, setup

setup(
    name="shardmark",
    version="0.1.0",
    description="Durable per-shard checkpoints for stream consumers",
    license="Apache-2.0",
    packages=find_packages(include=["shardmark", "shardmark.*"]),
    python_requires=">=3.10",
    install_requires=[
        "redis>=5.0.1",
        "fsspec>=2023.6.0",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
    ],
    extras_require={
        "s3": [
            "s3fs>=2023.6.0",
        ],
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.24.0",
        ],
    },
)

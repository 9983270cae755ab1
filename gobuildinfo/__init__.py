"""gobuildinfo: verifiable build-info manifests for Go modules.

Runs a go command, then records every module archive the build used from
the local module cache with its MD5/SHA-1/SHA-256 checksums and the full
set of request chains leading to it from the main module.
"""

__version__ = "0.1.0"
__description__ = "Verifiable build-info manifests for Go modules"

from gobuildinfo.core.build import Build
from gobuildinfo.core.go_module import GoModule
from gobuildinfo.cli.app import app as cli

__all__ = ["Build", "GoModule", "cli", "__version__"]

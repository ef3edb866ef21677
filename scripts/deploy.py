#!/usr/bin/python3
"""
Deploys Untron to zkSync Era.

    ape run deploy [--mainnet] [--mock] [--autosign]

Requires PRIVATE_KEY; ADMIN_ADDRESS, UNLIMITED_CREATOR_ADDRESS,
REGISTRAR_ADDRESS and SP1_VKEY are optional.
"""

from untron_deployment.cli import cli

if __name__ == "__main__":
    cli()

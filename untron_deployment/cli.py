from pathlib import Path

import click
from ape import networks

from untron_deployment.artifacts import load_artifacts
from untron_deployment.config import check_preflight, print_config, resolve_config
from untron_deployment.confirm import _continue
from untron_deployment.constants import DEFAULT_PARAMS_FILEPATH
from untron_deployment.deployer import Deployer
from untron_deployment.exceptions import DeploymentError
from untron_deployment.network import check_chain_id, connect, load_deployer_account
from untron_deployment.orchestration import run


@click.command()
@click.option(
    "--mainnet",
    is_flag=True,
    default=False,
    help="Deploy to zkSync Era mainnet with the production dependencies (default: testnet).",
)
@click.option(
    "--mock",
    is_flag=True,
    default=False,
    help="Deploy a mock SP1 verifier, even on mainnet.",
)
@click.option(
    "--autosign",
    is_flag=True,
    default=False,
    help="Do not ask for confirmation before each deployment and transaction.",
)
@click.option(
    "--params",
    "params_filepath",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=DEFAULT_PARAMS_FILEPATH,
    show_default=True,
    help="Deployment params YAML.",
)
@click.option(
    "--contracts-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory holding the zkout/ and artifacts/ compiler outputs.",
)
@click.option(
    "--manifest",
    "manifest_filepath",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where to write the deployment manifest (default: the params file's filename).",
)
def cli(mainnet, mock, autosign, params_filepath, contracts_dir, manifest_filepath):
    """Deploys UntronCore behind an ERC1967 proxy on zkSync Era."""
    try:
        config = resolve_config(mainnet=mainnet, mock=mock, params_filepath=params_filepath)
        check_preflight(config)
        print_config(config)

        artifacts = load_artifacts(contracts_dir)
        manifest_filepath = manifest_filepath or Path(config.manifest_filename)

        with connect(config):
            check_chain_id(config, networks.provider.chain_id)
            account = load_deployer_account(config.private_key, config.passphrase)
            print(f"Account: {account.address}", f"Manifest: {manifest_filepath}", sep="\n")
            if not autosign:
                _continue()

            deployer = Deployer(account, autosign=autosign)
            run(
                config=config,
                deployer=deployer,
                artifacts=artifacts,
                manifest_filepath=manifest_filepath,
            )
    except DeploymentError as e:
        raise click.ClickException(f"{type(e).__name__}: {e}")


if __name__ == "__main__":
    cli()

from ape import accounts, networks
from ape.api import AccountAPI
from ape.exceptions import AccountsError
from ape_accounts import import_account_from_private_key
from eth_account import Account

from untron_deployment.config import DeploymentConfig
from untron_deployment.constants import PASSPHRASE_ENVVAR
from untron_deployment.exceptions import ChainMismatch, ConfigurationError

ACCOUNT_ALIAS_PREFIX = "untron-deployer"


def connect(config: DeploymentConfig):
    """Returns the ape provider context for the target network."""
    print(f"Connecting to zkSync Era {config.network} at {config.network_uri}...")
    return networks.parse_network_choice(config.network_uri)


def check_chain_id(config: DeploymentConfig, chain_id: int) -> None:
    if chain_id != config.chain_id:
        raise ChainMismatch(
            f"chain_id in params file ({config.chain_id}) does not match "
            f"chain_id of current network ({chain_id})."
        )


def load_deployer_account(private_key: str, passphrase: str) -> AccountAPI:
    """
    Loads the deployer as an ape keyfile account, importing the private key
    on first use, and unlocks it for the rest of the run.
    """
    try:
        address = Account.from_key(private_key).address
    except ValueError:
        raise ConfigurationError("Deployer private key is not valid.")

    alias = f"{ACCOUNT_ALIAS_PREFIX}-{address[2:10].lower()}"
    if alias in accounts.aliases:
        account = accounts.load(alias)
    else:
        account = import_account_from_private_key(alias, passphrase, private_key)
        print(f"Account imported: {account.address}")

    if account.address != address:
        raise ConfigurationError(f"Account alias '{alias}' does not belong to {address}.")

    try:
        account.set_autosign(True, passphrase=passphrase)
    except AccountsError as e:
        raise ConfigurationError(
            f"Could not unlock account alias '{alias}' ({e}); set {PASSPHRASE_ENVVAR} "
            "to the passphrase it was imported with."
        )
    return account

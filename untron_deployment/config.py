import os
from enum import Enum
from pathlib import Path
from typing import Dict, Mapping, NamedTuple, Optional

from eth_typing import ChecksumAddress
from hexbytes import HexBytes

from untron_deployment.constants import (
    ADMIN_ENVVAR,
    AGGREGATION_ROUTER,
    DEFAULT_MANIFEST_FILENAME,
    DEFAULT_PARAMS_FILEPATH,
    DEPENDENCY_CONSTANTS,
    MAINNET,
    PASSPHRASE_ENVVAR,
    PRIVATE_KEY_ENVVAR,
    REGISTRAR_ENVVAR,
    SP1_VERIFIER,
    SP1_VERIFIER_ENVVAR,
    SP1_VKEY_ENVVAR,
    SPOKE_POOL,
    SUPPORTED_NETWORKS,
    TESTNET,
    UNLIMITED_CREATOR_ENVVAR,
    USDT,
    ZERO_VKEY,
)
from untron_deployment.exceptions import (
    ConfigurationError,
    MissingCredential,
    UnresolvedDependency,
)
from untron_deployment.utils import (
    _load_yaml,
    checksum_address,
    is_unresolved,
    optional_address,
)


class DeploymentTarget(Enum):
    PRODUCTION = MAINNET
    TEST = TESTNET

    @property
    def label(self) -> str:
        return self.value


class Dependencies(NamedTuple):
    """Addresses of the external contracts UntronCore is wired to."""

    spoke_pool: str
    usdt: str
    aggregation_router: str
    sp1_verifier: str


class RoleRecipients(NamedTuple):
    """Long-term role holders; None leaves the role with the deployer."""

    admin: Optional[ChecksumAddress] = None
    unlimited_creator: Optional[ChecksumAddress] = None
    registrar: Optional[ChecksumAddress] = None


class DeploymentConfig(NamedTuple):
    """
    Resolved once at process start and passed explicitly to every stage.
    """

    target: DeploymentTarget
    use_mock_verifier: bool
    network_uri: str
    chain_id: int
    private_key: str
    passphrase: str
    defaults: Dependencies
    recipients: RoleRecipients
    vkey: bytes
    manifest_filename: str = DEFAULT_MANIFEST_FILENAME

    @property
    def network(self) -> str:
        return self.target.label

    @property
    def mock_dependencies(self) -> bool:
        """Mocks never substitute real economic dependencies in production."""
        return self.target is DeploymentTarget.TEST

    @property
    def mock_verifier(self) -> bool:
        return self.mock_dependencies or self.use_mock_verifier

    def __repr__(self) -> str:
        # keep the private key out of tracebacks and logs
        return (
            f"DeploymentConfig(target={self.target.name}, "
            f"use_mock_verifier={self.use_mock_verifier}, "
            f"network_uri={self.network_uri}, chain_id={self.chain_id})"
        )


def load_params(filepath: Path = DEFAULT_PARAMS_FILEPATH) -> Dict:
    """Loads and validates a deployment params YAML file."""
    print(f"Validating parameters YAML {filepath}...")
    try:
        params = _load_yaml(filepath)
    except FileNotFoundError:
        raise ConfigurationError(f"Params file not found at {filepath}.")
    if not isinstance(params, dict):
        raise ConfigurationError(f"Malformed params file {filepath}.")

    networks = params.get("networks")
    if not isinstance(networks, dict):
        raise ConfigurationError("networks is not set in params file.")
    for network in SUPPORTED_NETWORKS:
        network_params = networks.get(network)
        if not isinstance(network_params, dict):
            raise ConfigurationError(f"{network} network is not set in params file.")
        if not network_params.get("uri"):
            raise ConfigurationError(f"uri is not set for {network} in params file.")
        if not network_params.get("chain_id"):
            raise ConfigurationError(f"chain_id is not set for {network} in params file.")

    constants = params.get("constants")
    if not isinstance(constants, dict):
        raise ConfigurationError("Params file missing 'constants' field.")
    for name in DEPENDENCY_CONSTANTS:
        value = constants.get(name)
        if value is None:
            raise ConfigurationError(f"Constant '{name}' not found in params file.")
        if not is_unresolved(value):
            constants[name] = checksum_address(value, name)

    return params


def _resolve_vkey(value: Optional[str]) -> bytes:
    if not value:
        return bytes(ZERO_VKEY)
    try:
        vkey = bytes(HexBytes(value.strip()))
    except ValueError:
        raise ConfigurationError(f"{SP1_VKEY_ENVVAR} is not valid hex.")
    if len(vkey) != 32:
        raise ConfigurationError(f"{SP1_VKEY_ENVVAR} must be 32 bytes, got {len(vkey)}.")
    return vkey


def resolve_config(
    mainnet: bool,
    mock: bool,
    environ: Optional[Mapping[str, str]] = None,
    params: Optional[Dict] = None,
    params_filepath: Path = DEFAULT_PARAMS_FILEPATH,
) -> DeploymentConfig:
    """
    Resolves the deployment configuration from the invocation flags,
    the environment and the params file.

    Every combination of flags is valid; the private key is the only
    mandatory input.
    """
    environ = os.environ if environ is None else environ

    private_key = environ.get(PRIVATE_KEY_ENVVAR)
    if not private_key:
        raise MissingCredential(
            f"Deployer private key is required; please set {PRIVATE_KEY_ENVVAR}."
        )

    if params is None:
        params = load_params(params_filepath)

    target = DeploymentTarget.PRODUCTION if mainnet else DeploymentTarget.TEST
    network_params = params["networks"][target.label]
    constants = params["constants"]

    sp1_verifier = constants[SP1_VERIFIER]
    verifier_override = optional_address(environ.get(SP1_VERIFIER_ENVVAR), SP1_VERIFIER_ENVVAR)
    if verifier_override:
        sp1_verifier = verifier_override

    defaults = Dependencies(
        spoke_pool=constants[SPOKE_POOL],
        usdt=constants[USDT],
        aggregation_router=constants[AGGREGATION_ROUTER],
        sp1_verifier=sp1_verifier,
    )

    recipients = RoleRecipients(
        admin=optional_address(environ.get(ADMIN_ENVVAR), ADMIN_ENVVAR),
        unlimited_creator=optional_address(
            environ.get(UNLIMITED_CREATOR_ENVVAR), UNLIMITED_CREATOR_ENVVAR
        ),
        registrar=optional_address(environ.get(REGISTRAR_ENVVAR), REGISTRAR_ENVVAR),
    )

    manifest_params = params.get("manifest") or dict()
    return DeploymentConfig(
        target=target,
        use_mock_verifier=mock,
        network_uri=network_params["uri"],
        chain_id=int(network_params["chain_id"]),
        private_key=private_key,
        passphrase=environ.get(PASSPHRASE_ENVVAR) or private_key,
        defaults=defaults,
        recipients=recipients,
        vkey=_resolve_vkey(environ.get(SP1_VKEY_ENVVAR)),
        manifest_filename=manifest_params.get("filename", DEFAULT_MANIFEST_FILENAME),
    )


def check_preflight(config: DeploymentConfig) -> None:
    """
    Refuses to start a run that would wire a placeholder address into the protocol.
    """
    unresolved = list()
    if not config.mock_dependencies:
        for name in ("spoke_pool", "usdt", "aggregation_router"):
            if is_unresolved(getattr(config.defaults, name)):
                unresolved.append(name)
    if not config.mock_verifier and is_unresolved(config.defaults.sp1_verifier):
        unresolved.append("sp1_verifier")

    if unresolved:
        message = (
            f"Production address unresolved for {', '.join(unresolved)}; "
            "set it in the params file"
        )
        if "sp1_verifier" in unresolved:
            message += f", set {SP1_VERIFIER_ENVVAR} or deploy a mock verifier with --mock"
        raise UnresolvedDependency(f"{message}.")


def print_config(config: DeploymentConfig) -> None:
    print(
        f"Network: {config.network}",
        f"Endpoint: {config.network_uri}",
        f"Chain ID: {config.chain_id}",
        f"Mock dependencies: {config.mock_dependencies}",
        f"Mock SP1 verifier: {config.mock_verifier}",
        f"Admin: {config.recipients.admin}",
        f"Unlimited creator: {config.recipients.unlimited_creator}",
        f"Registrar: {config.recipients.registrar}",
        sep="\n",
    )

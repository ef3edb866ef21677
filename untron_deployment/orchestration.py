from pathlib import Path
from typing import Tuple

from ape.contracts import ContractInstance

from untron_deployment.artifacts import Artifacts
from untron_deployment.config import Dependencies, DeploymentConfig
from untron_deployment.constants import (
    INITIALIZER,
    MOCK_AGGREGATION_ROUTER,
    MOCK_SP1_VERIFIER,
    MOCK_SPOKE_POOL,
    MOCK_USDT,
    PROXY,
    UNTRON_CORE,
)
from untron_deployment.deployer import Deployer
from untron_deployment.manifest import DeploymentManifest, build_manifest, write_manifest
from untron_deployment.roles import configure_zk, migrate_roles


def provision_dependencies(
    deployer: Deployer, config: DeploymentConfig, artifacts: Artifacts
) -> Dependencies:
    """
    Resolves the external dependencies of UntronCore, deploying mocks where
    the target calls for them.
    """
    usdt = config.defaults.usdt
    spoke_pool = config.defaults.spoke_pool
    aggregation_router = config.defaults.aggregation_router
    sp1_verifier = config.defaults.sp1_verifier

    if config.mock_dependencies:
        usdt = deployer.deploy(artifacts[MOCK_USDT]).address
        spoke_pool = deployer.deploy(artifacts[MOCK_SPOKE_POOL]).address
        aggregation_router = deployer.deploy(artifacts[MOCK_AGGREGATION_ROUTER]).address

    # the verifier mock can be forced on its own, even against production dependencies
    if config.mock_verifier:
        sp1_verifier = deployer.deploy(artifacts[MOCK_SP1_VERIFIER]).address

    return Dependencies(
        spoke_pool=spoke_pool,
        usdt=usdt,
        aggregation_router=aggregation_router,
        sp1_verifier=sp1_verifier,
    )


def deploy_core(
    deployer: Deployer, artifacts: Artifacts, dependencies: Dependencies
) -> Tuple[ContractInstance, ContractInstance]:
    """
    Deploys the UntronCore implementation and its proxy.
    Returns the proxy (as UntronCore) and the implementation.
    """
    untron_container = artifacts[UNTRON_CORE]
    implementation = deployer.deploy(untron_container)

    # argument order is part of UntronCore.initialize's interface
    untron = deployer.deploy_proxy(
        artifacts[PROXY],
        untron_container,
        implementation,
        INITIALIZER,
        dependencies.spoke_pool,
        dependencies.usdt,
        dependencies.aggregation_router,
    )
    return untron, implementation


def run(
    config: DeploymentConfig,
    deployer: Deployer,
    artifacts: Artifacts,
    manifest_filepath: Path,
) -> DeploymentManifest:
    """
    Runs the whole deployment, one on-chain action at a time.

    Nothing is rolled back on failure: actions already confirmed stay on
    chain and the manifest is only written once every step succeeded.
    """
    deployer_address = deployer.address

    dependencies = provision_dependencies(deployer, config, artifacts)
    untron, implementation = deploy_core(deployer, artifacts, dependencies)

    migrate_roles(deployer, untron, config.recipients, deployer_address)
    configure_zk(deployer, untron, dependencies.sp1_verifier, config.vkey)

    manifest = build_manifest(
        config=config,
        untron=untron,
        implementation=implementation,
        dependencies=dependencies,
        deployer_address=deployer_address,
    )
    write_manifest(manifest, manifest_filepath)
    return manifest

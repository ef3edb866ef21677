from pathlib import Path

from ape.utils import EMPTY_BYTES32

import untron_deployment

#
# Filesystem
#

DEPLOYMENT_DIR = Path(untron_deployment.__file__).parent
PARAMS_DIR = DEPLOYMENT_DIR / "params"
DEFAULT_PARAMS_FILEPATH = PARAMS_DIR / "zksync.yml"
DEFAULT_MANIFEST_FILENAME = "deployment.json"

#
# Networks
#

MAINNET = "mainnet"
TESTNET = "testnet"

SUPPORTED_NETWORKS = [MAINNET, TESTNET]

#
# Environment
#

PRIVATE_KEY_ENVVAR = "PRIVATE_KEY"
PASSPHRASE_ENVVAR = "DEPLOYER_PASSPHRASE"
ADMIN_ENVVAR = "ADMIN_ADDRESS"
UNLIMITED_CREATOR_ENVVAR = "UNLIMITED_CREATOR_ADDRESS"
REGISTRAR_ENVVAR = "REGISTRAR_ADDRESS"
SP1_VKEY_ENVVAR = "SP1_VKEY"
SP1_VERIFIER_ENVVAR = "SP1_VERIFIER_ADDRESS"

#
# Contracts
#

UNTRON_CORE = "UntronCore"
PROXY = "ERC1967Proxy"
MOCK_USDT = "MockUSDT"
MOCK_SPOKE_POOL = "MockSpokePool"
MOCK_AGGREGATION_ROUTER = "MockAggregationRouter"
MOCK_SP1_VERIFIER = "SP1MockVerifier"

# contract name -> compiler output, relative to the contracts directory
ARTIFACT_PATHS = {
    UNTRON_CORE: Path("zkout") / "UntronCore.sol" / "UntronCore.json",
    MOCK_SPOKE_POOL: Path("zkout") / "MockSpokePool.sol" / "MockSpokePool.json",
    MOCK_AGGREGATION_ROUTER: (
        Path("zkout") / "MockAggregationRouter.sol" / "MockAggregationRouter.json"
    ),
    MOCK_SP1_VERIFIER: Path("zkout") / "SP1MockVerifier.sol" / "SP1MockVerifier.json",
    MOCK_USDT: Path("zkout") / "MockUSDT.sol" / "MockUSDT.json",
    PROXY: Path("artifacts") / "ERC1967Proxy.json",
}

INITIALIZER = "initialize"
ZK_SETTER = "setUntronZKVariables"

#
# Dependencies
#

# params file constant names
USDT = "USDT"
SPOKE_POOL = "SPOKE_POOL"
AGGREGATION_ROUTER = "AGGREGATION_ROUTER"
SP1_VERIFIER = "SP1_VERIFIER"

DEPENDENCY_CONSTANTS = [USDT, SPOKE_POOL, AGGREGATION_ROUTER, SP1_VERIFIER]

# production SP1 verifier on zkSync Era is not known yet
UNRESOLVED_ADDRESS = "0x..."

ZERO_VKEY = EMPTY_BYTES32

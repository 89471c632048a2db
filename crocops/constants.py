from pathlib import Path

import crocops

#
# Filesystem
#

CROCOPS_DIR = Path(crocops.__file__).parent
ARTIFACTS_DIR = CROCOPS_DIR / "artifacts"
PARAMS_DIR = CROCOPS_DIR / "params"

ADDRESS_REGISTRY_FILEPATH = ARTIFACTS_DIR / "addresses.json"
SALT_REGISTRY_FILEPATH = ARTIFACTS_DIR / "salts.json"
POOL_PARAMS_FILEPATH = PARAMS_DIR / "pools.yml"

#
# Environment
#

CHAIN_ID_ENVVAR = "CHAIN_ID"
RPC_URL_ENVVAR = "RPC_URL"

#
# Callpaths (proxy slots in CrocSwapDex)
#

BOOT_PROXY_IDX = 0
SWAP_PROXY_IDX = 1
LP_PROXY_IDX = 2
COLD_PROXY_IDX = 3
LONG_PROXY_IDX = 4
MICRO_PROXY_IDX = 5
KNOCKOUT_LP_PROXY_IDX = 7
FLAG_CROSS_PROXY_IDX = 3500
SAFE_MODE_PROXY_PATH = 9999

#
# Timelocks
#

ONE_DAY = 24 * 60 * 60
MAX_TIMELOCK_DELAY = 7 * ONE_DAY

# delay the timelocks are constructed with, and the delay used for the
# resolutions issued right after deployment
START_TIMELOCK_DELAY = 30
INIT_TIMELOCK_DELAY = START_TIMELOCK_DELAY

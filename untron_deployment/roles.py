from typing import List, NamedTuple, Optional, Tuple

from ape.contracts import ContractInstance
from eth_typing import ChecksumAddress

from untron_deployment.config import RoleRecipients
from untron_deployment.constants import ZK_SETTER
from untron_deployment.deployer import Transactor


class Role(NamedTuple):
    name: str
    recipient_field: str
    # role id getters exposed by UntronCore
    role_getters: Tuple[str, ...]


ADMIN = Role(
    name="admin",
    recipient_field="admin",
    role_getters=("DEFAULT_ADMIN_ROLE", "UPGRADER_ROLE"),
)
UNLIMITED_CREATOR = Role(
    name="unlimited creator",
    recipient_field="unlimited_creator",
    role_getters=("UNLIMITED_CREATOR_ROLE",),
)
REGISTRAR = Role(
    name="registrar",
    recipient_field="registrar",
    role_getters=("REGISTRAR_ROLE",),
)

ROLES = (ADMIN, UNLIMITED_CREATOR, REGISTRAR)


def transfer_role(
    transactor: Transactor,
    untron: ContractInstance,
    role: Role,
    recipient: ChecksumAddress,
    deployer_address: ChecksumAddress,
) -> None:
    """
    Hands a role over from the deployer to its recipient.

    All grants land before any revoke so the role always has a holder.
    """
    print(f"\nTransferring {role.name} role to {recipient}")
    role_ids = [getattr(untron, getter)() for getter in role.role_getters]
    for role_id in role_ids:
        transactor.transact(untron.grantRole, role_id, recipient)
    for role_id in role_ids:
        transactor.transact(untron.revokeRole, role_id, deployer_address)


def migrate_roles(
    transactor: Transactor,
    untron: ContractInstance,
    recipients: RoleRecipients,
    deployer_address: ChecksumAddress,
) -> List[str]:
    """
    Transfers each role with a configured recipient; the others stay with the deployer.
    Returns the names of the transferred roles.
    """
    migrated = list()
    for role in ROLES:
        recipient: Optional[ChecksumAddress] = getattr(recipients, role.recipient_field)
        if not recipient:
            print(f"(i) No recipient for {role.name} role; it stays with the deployer.")
            continue
        transfer_role(transactor, untron, role, recipient, deployer_address)
        migrated.append(role.name)
    return migrated


def configure_zk(
    transactor: Transactor, untron: ContractInstance, verifier: ChecksumAddress, vkey: bytes
) -> None:
    print("\nSetting SP1 verifier and verification key on UntronCore")
    transactor.transact(getattr(untron, ZK_SETTER), verifier, vkey)

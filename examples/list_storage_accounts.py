import asyncio
import contextlib

from anyio import create_task_group

from coreason_arm import CachedTokenCredential, ClientSecretCredential, CoreasonArmError, CredentialSettings
from coreason_arm.services import KeyVaultManagementClient, StorageManagementClient


async def main() -> None:
    """
    Lists storage accounts and key vaults of one subscription.
    Includes:
    - CredentialSettings read from AZURE_TENANT_ID / AZURE_CLIENT_ID / AZURE_CLIENT_SECRET
    - A single cached credential shared by two service clients
    - TaskGroup for concurrency
    """
    print(">>> Starting ARM listing example")

    settings = CredentialSettings()  # type: ignore[call-arg]
    credential = CachedTokenCredential(ClientSecretCredential.from_settings(settings))
    subscription_id = "00000000-0000-0000-0000-000000000000"

    async with (
        StorageManagementClient(credential=credential) as storage,
        KeyVaultManagementClient(credential=credential) as keyvault,
    ):

        async def list_accounts() -> None:
            response = await storage.storage_accounts.list(subscription_id)
            print(f"    - storage accounts: {len(response.value.get('value', []))}")

        async def list_vaults() -> None:
            response = await keyvault.vaults.list_by_subscription(subscription_id, top=10)
            print(f"    - key vaults: {len(response.value.get('value', []))}")

        try:
            async with create_task_group() as tg:
                tg.start_soon(list_accounts)
                tg.start_soon(list_vaults)
        except* CoreasonArmError as eg:
            for e in eg.exceptions:
                print(f">>> {type(e).__name__}: {e}")

    print(">>> Done.")


if __name__ == "__main__":
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(main())

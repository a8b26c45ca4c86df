"""Metaplex Core 'create asset' instruction (CreateV1)."""

from construct import Int8ul, Int32ul, PascalString, Struct
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID

MPL_CORE_PROGRAM_ID = Pubkey.from_string("CoREENxT6tW1HoK8ypY1SxRMZTcVPm7R94rH4PZNhX7d")

CREATE_V1_DISCRIMINATOR = 0
DATA_STATE_ACCOUNT_STATE = 0
NO_PLUGINS = 0

CREATE_V1_LAYOUT = Struct(
    "discriminator" / Int8ul,
    "data_state" / Int8ul,
    "name" / PascalString(Int32ul, "utf8"),
    "uri" / PascalString(Int32ul, "utf8"),
    "plugins" / Int8ul,  # Option<Vec<_>> tag
)


def encode_create_v1_data(name: str, uri: str) -> bytes:
    return CREATE_V1_LAYOUT.build(
        {
            "discriminator": CREATE_V1_DISCRIMINATOR,
            "data_state": DATA_STATE_ACCOUNT_STATE,
            "name": name,
            "uri": uri,
            "plugins": NO_PLUGINS,
        }
    )


def build_create_asset_instruction(
    *,
    asset: Pubkey,
    payer: Pubkey,
    owner: Pubkey,
    name: str,
    uri: str,
) -> Instruction:
    """Build CreateV1 for a standalone asset owned by `owner`.

    Optional accounts that are not used are filled with the program id.
    """
    unused = AccountMeta(MPL_CORE_PROGRAM_ID, is_signer=False, is_writable=False)
    accounts = [
        AccountMeta(asset, is_signer=True, is_writable=True),
        unused,  # collection
        unused,  # authority
        AccountMeta(payer, is_signer=True, is_writable=True),
        AccountMeta(owner, is_signer=False, is_writable=False),
        unused,  # update authority
        AccountMeta(SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
        unused,  # log wrapper
    ]
    return Instruction(MPL_CORE_PROGRAM_ID, encode_create_v1_data(name, uri), accounts)

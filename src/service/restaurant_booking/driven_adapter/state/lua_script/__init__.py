"""Lua script loader for table hold Kvrocks operations"""

from pathlib import Path


def load_lua_script(*, script_name: str) -> str:
    """
    Load a Lua script from the lua_script directory

    Raises:
        FileNotFoundError: If the script file doesn't exist
    """
    script_path = Path(__file__).parent / f'{script_name}.lua'

    if not script_path.exists():
        raise FileNotFoundError(f'Lua script not found: {script_path}')

    return script_path.read_text(encoding='utf-8')


ACQUIRE_TABLE_HOLD_SCRIPT = load_lua_script(script_name='acquire_table_hold')
RELEASE_TABLE_HOLD_SCRIPT = load_lua_script(script_name='release_table_hold')

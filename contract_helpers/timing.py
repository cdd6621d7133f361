import asyncio


async def wait_secs(secs: float = 0) -> None:
    """
    Await `secs` seconds.

    With the default of zero this only yields control to the event loop once.
    """
    await asyncio.sleep(secs)

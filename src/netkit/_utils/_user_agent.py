import importlib.metadata


def user_agent_value() -> str:
    product = "NetKit.Python"

    try:
        version = importlib.metadata.version("netkit")
    except importlib.metadata.PackageNotFoundError:
        version = "unknown"

    return f"{product}/{version}"

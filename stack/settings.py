from stack.utils import getenv, getenv_bool, getenv_int

STACKNAME = getenv("NETWORK_STACKNAME", "CustomNetwork")

# Network settings
CIDR = getenv("NETWORK_CIDR", "10.0.0.0/16")
MAX_AZS = getenv_int("NETWORK_MAX_AZS", 2)
NAT_GATEWAYS = getenv_int("NETWORK_NAT_GATEWAYS", 2)
CIDR_MASK = getenv_int("NETWORK_CIDR_MASK", 24)

# Outbound is denied unless explicitly opened.
ALLOW_ALL_OUTBOUND = getenv_bool("NETWORK_ALLOW_ALL_OUTBOUND", False)
EXPORT_OUTPUTS = getenv_bool("NETWORK_EXPORT_OUTPUTS", False)

ACCOUNT = getenv("CDK_DEFAULT_ACCOUNT", None)
REGION = getenv("CDK_DEFAULT_REGION", None)

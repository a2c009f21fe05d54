from typing import List, Optional

from aws_cdk import CfnOutput, Stack
from constructs import Construct
from stack.networkconstructs.network import Network
from stack.networkconstructs.network_acl import (
    PROTOCOL_TCP,
    CustomNetworkAcl,
    NetworkAclEntrySpec,
)
from stack.networkconstructs.security_group import (
    InstanceSecurityGroup,
    SecurityGroupRule,
    egress_rule,
    ingress_rule,
)

DEFAULT_SECURITY_GROUP_RULES = [
    ingress_rule(22, description="Allow SSH"),
    egress_rule(443, description="Allow HTTPS Out"),
]

DEFAULT_ACL_ENTRIES = [
    # Allow inbound HTTP
    NetworkAclEntrySpec(rule_number=100, egress=False, port=80, protocol=PROTOCOL_TCP),
    # Allow outbound HTTPS
    NetworkAclEntrySpec(rule_number=100, egress=True, port=443, protocol=PROTOCOL_TCP),
]


class NetworkStack(Stack):
    """Custom VPC with public and private subnets, security group and NACL."""

    def __init__(
        self,
        scope: Construct,
        id: str,
        cidr: str = "10.0.0.0/16",
        max_azs: int = 2,
        nat_gateways: int = 2,
        cidr_mask: int = 24,
        allow_all_outbound: bool = False,
        security_group_rules: Optional[List[SecurityGroupRule]] = None,
        acl_entries: Optional[List[NetworkAclEntrySpec]] = None,
        export_outputs: bool = False,
        **kwargs,
    ) -> None:
        super().__init__(scope, id, **kwargs)
        if security_group_rules is None:
            security_group_rules = DEFAULT_SECURITY_GROUP_RULES
        if acl_entries is None:
            acl_entries = DEFAULT_ACL_ENTRIES

        self.network = Network(
            self,
            "Network",
            cidr=cidr,
            max_azs=max_azs,
            nat_gateways=nat_gateways,
            cidr_mask=cidr_mask,
        )

        self.security_group = InstanceSecurityGroup(
            self,
            "InstanceSecurityGroup",
            network=self.network,
            rules=security_group_rules,
            allow_all_outbound=allow_all_outbound,
        )

        # Public subnets keep the default ACL
        self.network_acl = CustomNetworkAcl(
            self, "CustomNACL", network=self.network, entries=acl_entries
        )
        self.network_acl.associate_private_subnets()

        self.vpc_output = self._output(
            "VpcId", self.network.vpc.vpc_id, export_outputs
        )
        self.security_group_output = self._output(
            "SecurityGroupId", self.security_group.security_group_id, export_outputs
        )

    def _output(self, name: str, value: str, export: bool) -> CfnOutput:
        # Exports let other stacks import the value by name
        export_name = f"{self.stack_name}-{name}" if export else None
        return CfnOutput(self, name, value=value, export_name=export_name)

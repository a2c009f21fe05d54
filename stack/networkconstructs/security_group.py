from typing import List, NamedTuple, Optional, Union

from aws_cdk import aws_ec2
from constructs import Construct
from stack.networkconstructs.network import Network

ANY_IPV4 = "0.0.0.0/0"
PROTOCOLS = ("tcp", "udp", "all")
DEFAULT_DESCRIPTION = "Security Group for EC2 in private subnet"


class SecurityGroupRule(NamedTuple):
    """One stateful firewall rule.

    `peer` is either a CIDR string or a CDK peer such as another security
    group. Protocol "all" ignores the port fields.
    """

    egress: bool
    port: Optional[int] = None
    to_port: Optional[int] = None
    peer: Union[str, aws_ec2.IPeer] = ANY_IPV4
    protocol: str = "tcp"
    description: str = ""

    def validate(self):
        if self.protocol not in PROTOCOLS:
            raise ValueError(f"Unsupported protocol {self.protocol!r}")
        if self.protocol == "all":
            return
        if self.port is None:
            raise ValueError(f"A {self.protocol} rule needs a port")
        if self.to_port is not None and self.to_port < self.port:
            raise ValueError(f"Invalid port range {self.port}-{self.to_port}")

    def cdk_peer(self) -> aws_ec2.IPeer:
        if isinstance(self.peer, str):
            if self.peer == ANY_IPV4:
                return aws_ec2.Peer.any_ipv4()
            return aws_ec2.Peer.ipv4(self.peer)
        return self.peer

    def cdk_port(self) -> aws_ec2.Port:
        if self.protocol == "all":
            return aws_ec2.Port.all_traffic()
        to_port = self.port if self.to_port is None else self.to_port
        if self.protocol == "tcp":
            if to_port == self.port:
                return aws_ec2.Port.tcp(self.port)
            return aws_ec2.Port.tcp_range(self.port, to_port)
        if to_port == self.port:
            return aws_ec2.Port.udp(self.port)
        return aws_ec2.Port.udp_range(self.port, to_port)


def ingress_rule(port, peer=ANY_IPV4, description="", **kwargs) -> SecurityGroupRule:
    return SecurityGroupRule(
        egress=False, port=port, peer=peer, description=description, **kwargs
    )


def egress_rule(port, peer=ANY_IPV4, description="", **kwargs) -> SecurityGroupRule:
    return SecurityGroupRule(
        egress=True, port=port, peer=peer, description=description, **kwargs
    )


class InstanceSecurityGroup(Construct):
    def __init__(
        self,
        scope: Construct,
        id: str,
        network: Network,
        rules: Optional[List[SecurityGroupRule]] = None,
        allow_all_outbound: bool = False,
        description: str = DEFAULT_DESCRIPTION,
        **kwargs,
    ) -> None:
        super().__init__(scope, id, **kwargs)
        self.allow_all_outbound = allow_all_outbound

        self.security_group = aws_ec2.SecurityGroup(
            self,
            "SecurityGroup",
            vpc=network.vpc,
            allow_all_outbound=allow_all_outbound,
            description=description,
        )
        self.security_group_id = self.security_group.security_group_id

        self.rules: List[SecurityGroupRule] = []
        for rule in rules or []:
            self.add_rule(rule)

    def add_rule(self, rule: SecurityGroupRule) -> bool:
        """Add a rule, returning False when an equal rule already exists."""
        if rule in self.rules:
            return False
        rule.validate()
        description = rule.description or None
        if rule.egress:
            self.security_group.add_egress_rule(
                rule.cdk_peer(), rule.cdk_port(), description
            )
        else:
            self.security_group.add_ingress_rule(
                rule.cdk_peer(), rule.cdk_port(), description
            )
        self.rules.append(rule)
        return True

    @property
    def ingress_rules(self) -> List[SecurityGroupRule]:
        return [r for r in self.rules if not r.egress]

    @property
    def egress_rules(self) -> List[SecurityGroupRule]:
        return [r for r in self.rules if r.egress]

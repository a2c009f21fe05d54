from typing import Dict, List, NamedTuple, Optional, Tuple

from aws_cdk import aws_ec2
from constructs import Construct
from stack.networkconstructs.network import Network

# IANA protocol numbers
PROTOCOL_ALL = -1
PROTOCOL_TCP = 6
PROTOCOL_UDP = 17

ACTIONS = ("allow", "deny")
MIN_RULE_NUMBER = 1
MAX_RULE_NUMBER = 32766


class NetworkAclEntrySpec(NamedTuple):
    """A stateless ACL rule. Lower rule numbers are evaluated first."""

    rule_number: int
    egress: bool
    port: Optional[int] = None
    to_port: Optional[int] = None
    cidr: str = "0.0.0.0/0"
    protocol: int = PROTOCOL_TCP
    action: str = "allow"

    @property
    def key(self) -> Tuple[int, bool]:
        # Ingress and egress rule numbers are separate namespaces
        return (self.rule_number, self.egress)

    @property
    def direction(self) -> str:
        return "Egress" if self.egress else "Ingress"

    def validate(self):
        if not MIN_RULE_NUMBER <= self.rule_number <= MAX_RULE_NUMBER:
            raise ValueError(
                f"Rule number {self.rule_number} outside "
                f"{MIN_RULE_NUMBER}-{MAX_RULE_NUMBER}"
            )
        if self.action not in ACTIONS:
            raise ValueError(f"Rule action must be allow or deny, got {self.action!r}")
        if self.protocol in (PROTOCOL_TCP, PROTOCOL_UDP) and self.port is None:
            raise ValueError(f"Rule {self.rule_number} needs a port range")
        if self.to_port is not None and self.port is not None:
            if self.to_port < self.port:
                raise ValueError(f"Invalid port range {self.port}-{self.to_port}")

    def port_range(self) -> Optional[aws_ec2.CfnNetworkAclEntry.PortRangeProperty]:
        if self.port is None:
            return None
        to_port = self.port if self.to_port is None else self.to_port
        return aws_ec2.CfnNetworkAclEntry.PortRangeProperty(
            from_=self.port, to=to_port
        )


class CustomNetworkAcl(Construct):
    """Network ACL bound to a VPC. Subnets are attached explicitly."""

    def __init__(
        self,
        scope: Construct,
        id: str,
        network: Network,
        entries: Optional[List[NetworkAclEntrySpec]] = None,
        **kwargs,
    ) -> None:
        super().__init__(scope, id, **kwargs)
        self.network = network

        self.acl = aws_ec2.CfnNetworkAcl(
            self,
            "NetworkAcl",
            vpc_id=network.vpc.vpc_id,
        )

        self.entries: Dict[Tuple[int, bool], NetworkAclEntrySpec] = {}
        self.acl_entries: List[aws_ec2.CfnNetworkAclEntry] = []
        self.associations: List[aws_ec2.CfnSubnetNetworkAclAssociation] = []

        for entry in entries or []:
            self.add_entry(entry)

    def add_entry(
        self, entry: NetworkAclEntrySpec
    ) -> Optional[aws_ec2.CfnNetworkAclEntry]:
        existing = self.entries.get(entry.key)
        if existing is not None:
            if existing == entry:
                return None
            raise ValueError(
                f"{entry.direction} rule number {entry.rule_number} "
                "is already declared on this network ACL"
            )
        entry.validate()

        acl_entry = aws_ec2.CfnNetworkAclEntry(
            self,
            f"{entry.direction}Rule{entry.rule_number}",
            network_acl_id=self.acl.ref,
            rule_number=entry.rule_number,
            protocol=entry.protocol,
            rule_action=entry.action,
            egress=entry.egress,
            cidr_block=entry.cidr,
            port_range=entry.port_range(),
        )
        self.entries[entry.key] = entry
        self.acl_entries.append(acl_entry)
        return acl_entry

    def associate(self, subnets: List[aws_ec2.ISubnet]) -> list:
        known = [
            s.node.path
            for s in self.network.public_subnets + self.network.private_subnets
        ]
        created = []
        for subnet in subnets:
            path = subnet.node.path
            if path not in known:
                raise ValueError(
                    f"Subnet {path} is not part of {self.network.node.path}"
                )
            bound_acl = self.network.acl_associations.get(path)
            if bound_acl is not None:
                raise ValueError(
                    f"Subnet {path} is already associated with network ACL {bound_acl}"
                )
            association = aws_ec2.CfnSubnetNetworkAclAssociation(
                self,
                f"SubnetAclAssociation{len(self.associations)}",
                network_acl_id=self.acl.ref,
                subnet_id=subnet.subnet_id,
            )
            self.network.acl_associations[path] = self.node.path
            self.associations.append(association)
            created.append(association)
        return created

    def associate_private_subnets(self) -> list:
        return self.associate(self.network.private_subnets)

    @property
    def ingress_entries(self) -> List[NetworkAclEntrySpec]:
        return [e for e in self.entries.values() if not e.egress]

    @property
    def egress_entries(self) -> List[NetworkAclEntrySpec]:
        return [e for e in self.entries.values() if e.egress]

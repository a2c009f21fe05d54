from typing import Dict

from aws_cdk import aws_ec2
from constructs import Construct

PUBLIC_SUBNET_NAME = "public-subnet"
PRIVATE_SUBNET_NAME = "private-subnet"


class Network(Construct):
    """VPC with one public and one private-with-egress subnet per AZ."""

    def __init__(
        self,
        scope: Construct,
        id: str,
        cidr: str = "10.0.0.0/16",
        max_azs: int = 2,
        nat_gateways: int = 2,
        cidr_mask: int = 24,
        **kwargs,
    ) -> None:
        super().__init__(scope, id, **kwargs)
        if max_azs < 2:
            raise ValueError(
                "max_azs must be at least 2 to span two availability zones, "
                f"got {max_azs}"
            )
        if nat_gateways < 1:
            raise ValueError(
                "Private subnets with egress need at least one NAT gateway, "
                f"got nat_gateways={nat_gateways}"
            )

        self.max_azs = max_azs
        self.requested_nat_gateways = nat_gateways
        self.cidr_mask = cidr_mask
        # Subnet path -> path of the custom ACL bound to it
        self.acl_associations: Dict[str, str] = {}

        # Mask applies uniformly to every subnet of a group
        public_subnet = aws_ec2.SubnetConfiguration(
            name=PUBLIC_SUBNET_NAME,
            subnet_type=aws_ec2.SubnetType.PUBLIC,
            cidr_mask=cidr_mask,
        )

        private_subnet = aws_ec2.SubnetConfiguration(
            name=PRIVATE_SUBNET_NAME,
            subnet_type=aws_ec2.SubnetType.PRIVATE_WITH_EGRESS,
            cidr_mask=cidr_mask,
        )

        self.vpc = aws_ec2.Vpc(
            self,
            "Vpc",
            ip_addresses=aws_ec2.IpAddresses.cidr(cidr),
            enable_dns_hostnames=True,
            enable_dns_support=True,
            max_azs=max_azs,
            nat_gateway_provider=aws_ec2.NatProvider.gateway(),
            nat_gateways=nat_gateways,
            subnet_configuration=[public_subnet, private_subnet],
        )
        self.public_subnets = self.vpc.public_subnets
        self.private_subnets = self.vpc.private_subnets
        # CDK places at most one NAT gateway per public subnet
        self.nat_gateways = min(nat_gateways, len(self.public_subnets))

    @property
    def private_availability_zones(self) -> list:
        zones = []
        for subnet in self.private_subnets:
            if subnet.availability_zone not in zones:
                zones.append(subnet.availability_zone)
        return zones

    @property
    def subnet_ids(self) -> list:
        return [s.subnet_id for s in self.public_subnets + self.private_subnets]

"""
CDK validation aspects for configuration-time checks.

These aspects run during `cdk synth` and add warnings for topologies that
deploy but leave a gap: private subnets without a NAT gateway in their own
availability zone, or a security group with no way out.

Usage:
    from stack.networkconstructs.validation import add_validation_aspects
    add_validation_aspects(app)
"""

import aws_cdk as cdk
import jsii
from constructs import IConstruct
from stack.networkconstructs.network import Network
from stack.networkconstructs.security_group import InstanceSecurityGroup


@jsii.implements(cdk.IAspect)
class NatCoverageAspect:
    """Warns when a Network has fewer NAT gateways than private AZs."""

    def visit(self, node: IConstruct) -> None:
        if not isinstance(node, Network):
            return
        zones = len(node.private_availability_zones)
        if node.nat_gateways < zones:
            cdk.Annotations.of(node).add_warning(
                f"{node.nat_gateways} NAT gateway(s) for private subnets in {zones} "
                f"availability zones: {zones - node.nat_gateways} zone(s) have no "
                "NAT gateway of their own and lose egress if another zone fails"
            )


@jsii.implements(cdk.IAspect)
class OutboundTrafficAspect:
    """Warns when a security group blocks every outbound connection."""

    def visit(self, node: IConstruct) -> None:
        if not isinstance(node, InstanceSecurityGroup):
            return
        if not node.allow_all_outbound and not node.egress_rules:
            cdk.Annotations.of(node).add_warning(
                "Security group denies outbound traffic by default and declares "
                "no egress rule: all outbound traffic is blocked"
            )


def add_validation_aspects(
    scope: IConstruct,
    check_nat_coverage: bool = True,
    check_outbound: bool = True,
) -> None:
    """
    Add validation aspects to every construct below scope.

    Args:
        scope: The CDK App or Stack to add aspects to
        check_nat_coverage: Whether to warn about AZs without a NAT gateway
        check_outbound: Whether to warn about security groups with no egress
    """
    if check_nat_coverage:
        cdk.Aspects.of(scope).add(NatCoverageAspect())
    if check_outbound:
        cdk.Aspects.of(scope).add(OutboundTrafficAspect())

import aws_cdk as cdk
from stack import settings
from stack.networkconstructs.validation import add_validation_aspects
from stack.stack import NetworkStack


def build_app() -> cdk.App:
    app = cdk.App()
    if settings.ACCOUNT and settings.REGION:
        env = cdk.Environment(account=settings.ACCOUNT, region=settings.REGION)
    else:
        env = None

    NetworkStack(
        app,
        settings.STACKNAME,
        stack_name=settings.STACKNAME,
        cidr=settings.CIDR,
        max_azs=settings.MAX_AZS,
        nat_gateways=settings.NAT_GATEWAYS,
        cidr_mask=settings.CIDR_MASK,
        allow_all_outbound=settings.ALLOW_ALL_OUTBOUND,
        export_outputs=settings.EXPORT_OUTPUTS,
        env=env,
    )
    add_validation_aspects(app)
    return app


if __name__ == "__main__":
    build_app().synth()

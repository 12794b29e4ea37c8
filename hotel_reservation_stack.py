from aws_cdk import Stack
from constructs import Construct

from infra.constructs import Api, Database, Functions, Layers

DEFAULT_JWT_ISSUER = "https://example.auth0.com/"
DEFAULT_JWT_AUDIENCE = "hotel-reservation-api"


class HotelReservationStack(Stack):
    def __init__(self, scope: Construct, construct_id: str, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        jwt_issuer = self.node.try_get_context("jwt_issuer") or DEFAULT_JWT_ISSUER
        jwt_audience = (
            self.node.try_get_context("jwt_audience") or DEFAULT_JWT_AUDIENCE
        )
        reverse_redemption = (
            self.node.try_get_context("reverse_redemption_on_payment_failure")
            or "false"
        )

        database = Database(self, "Database")
        layers = Layers(self, "Layers")

        fns = Functions(
            self,
            "Functions",
            table=database.table,
            runtime_layer=layers.runtime_layer,
            environment={
                "PAYMENT_REVERSE_REDEMPTION_ON_FAILURE": str(reverse_redemption),
            },
        )

        Api(
            self,
            "Api",
            jwt_issuer=jwt_issuer,
            jwt_audience=[jwt_audience],
            create_booking=fns.create_booking,
            settle_payment=fns.settle_payment,
            cancel_booking=fns.cancel_booking,
            get_booking=fns.get_booking,
            get_loyalty_account=fns.get_loyalty_account,
            get_points_history=fns.get_points_history,
        )

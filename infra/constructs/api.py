from aws_cdk import CfnOutput
from aws_cdk import aws_apigatewayv2 as apigwv2
from aws_cdk import aws_lambda as _lambda
from aws_cdk.aws_apigatewayv2_authorizers import HttpJwtAuthorizer
from aws_cdk.aws_apigatewayv2_integrations import HttpLambdaIntegration
from constructs import Construct


class Api(Construct):
    """API Gateway (HTTP API) Construct

    ログインユーザー向けのルートは JWT Authorizer で保護する。
    トークンの発行は外部の IdP（issuer / audience）の責務。
    ゲスト予約用の /guest 配下は認証なしで公開する。
    """

    def __init__(
        self,
        scope: Construct,
        id: str,
        jwt_issuer: str,
        jwt_audience: list[str],
        create_booking: _lambda.IFunction,
        settle_payment: _lambda.IFunction,
        cancel_booking: _lambda.IFunction,
        get_booking: _lambda.IFunction,
        get_loyalty_account: _lambda.IFunction,
        get_points_history: _lambda.IFunction,
    ) -> None:
        super().__init__(scope, id)

        self.http_api = apigwv2.HttpApi(
            self,
            "ReservationHttpApi",
            api_name="Hotel Reservation API",
        )

        authorizer = HttpJwtAuthorizer(
            "JwtAuthorizer",
            jwt_issuer,
            jwt_audience=jwt_audience,
        )

        create = HttpLambdaIntegration("CreateBookingIntegration", create_booking)
        settle = HttpLambdaIntegration("SettlePaymentIntegration", settle_payment)
        cancel = HttpLambdaIntegration("CancelBookingIntegration", cancel_booking)
        get = HttpLambdaIntegration("GetBookingIntegration", get_booking)
        account = HttpLambdaIntegration(
            "GetLoyaltyAccountIntegration", get_loyalty_account
        )
        history = HttpLambdaIntegration(
            "GetPointsHistoryIntegration", get_points_history
        )

        routes = [
            ("/bookings", apigwv2.HttpMethod.POST, create),
            ("/bookings/{booking_id}", apigwv2.HttpMethod.GET, get),
            ("/bookings/{booking_id}/payment", apigwv2.HttpMethod.POST, settle),
            ("/bookings/{booking_id}/cancel", apigwv2.HttpMethod.PUT, cancel),
            ("/loyalty/account", apigwv2.HttpMethod.GET, account),
            ("/loyalty/account/{user_id}", apigwv2.HttpMethod.GET, account),
            ("/loyalty/transactions", apigwv2.HttpMethod.GET, history),
        ]
        for path, method, integration in routes:
            self.http_api.add_routes(
                path=path,
                methods=[method],
                integration=integration,
                authorizer=authorizer,
            )

        guest_routes = [
            ("/guest/bookings", apigwv2.HttpMethod.POST, create),
            ("/guest/bookings/{booking_id}", apigwv2.HttpMethod.GET, get),
            ("/guest/bookings/{booking_id}/payment", apigwv2.HttpMethod.POST, settle),
            ("/guest/bookings/{booking_id}/cancel", apigwv2.HttpMethod.PUT, cancel),
        ]
        for path, method, integration in guest_routes:
            self.http_api.add_routes(
                path=path,
                methods=[method],
                integration=integration,
            )

        CfnOutput(self, "ApiEndpoint", value=self.http_api.api_endpoint)

import datetime

from aws_cdk import Duration
from aws_cdk import aws_dynamodb as dynamodb
from aws_cdk import aws_lambda as _lambda
from constructs import Construct

from infra.constructs.layers import RUNTIME

# 決済ゲートウェイの模擬遅延（請求 1 秒・払い戻し 0.5 秒）を含むため長めに取る
PAYMENT_TIMEOUT = Duration.seconds(15)
DEFAULT_TIMEOUT = Duration.seconds(10)


class Functions(Construct):
    """Lambda 関数を管理する Construct"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        table: dynamodb.Table,
        runtime_layer: _lambda.LayerVersion,
        environment: dict[str, str] | None = None,
    ) -> None:
        super().__init__(scope, id)
        self._table = table
        self._runtime_layer = runtime_layer
        self._environment = environment or {}

        self.create_booking = self._create_function(
            "CreateBookingLambda",
            "hotel_reservation.booking.handlers.create.lambda_handler",
            "booking-service",
        )

        self.settle_payment = self._create_function(
            "SettlePaymentLambda",
            "hotel_reservation.booking.handlers.settle_payment.lambda_handler",
            "booking-service",
            timeout=PAYMENT_TIMEOUT,
        )

        self.cancel_booking = self._create_function(
            "CancelBookingLambda",
            "hotel_reservation.booking.handlers.cancel.lambda_handler",
            "booking-service",
            timeout=PAYMENT_TIMEOUT,
        )

        self.get_booking = self._create_function(
            "GetBookingLambda",
            "hotel_reservation.booking.handlers.get_booking.lambda_handler",
            "booking-service",
        )

        self.get_loyalty_account = self._create_function(
            "GetLoyaltyAccountLambda",
            "hotel_reservation.loyalty.handlers.get_account.lambda_handler",
            "loyalty-service",
        )

        self.get_points_history = self._create_function(
            "GetPointsHistoryLambda",
            "hotel_reservation.loyalty.handlers.get_history.lambda_handler",
            "loyalty-service",
        )

        for fn in [
            self.create_booking,
            self.settle_payment,
            self.cancel_booking,
            self.get_loyalty_account,
        ]:
            table.grant_read_write_data(fn)

        table.grant_read_data(self.get_booking)
        table.grant_read_data(self.get_points_history)

    @property
    def all_functions(self) -> list[_lambda.Function]:
        return [
            self.create_booking,
            self.settle_payment,
            self.cancel_booking,
            self.get_booking,
            self.get_loyalty_account,
            self.get_points_history,
        ]

    def _create_function(
        self,
        id: str,
        handler: str,
        service_name: str,
        timeout: Duration = DEFAULT_TIMEOUT,
    ) -> _lambda.Function:
        return _lambda.Function(
            self,
            id,
            runtime=RUNTIME,
            handler=handler,
            code=_lambda.Code.from_asset("src"),
            layers=[self._runtime_layer],
            timeout=timeout,
            environment={
                "TABLE_NAME": self._table.table_name,
                "POWERTOOLS_SERVICE_NAME": service_name,
                "DEPLOY_TIME": datetime.datetime.now(datetime.timezone.utc).isoformat(),
                **self._environment,
            },
        )

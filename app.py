#!/usr/bin/env python3

import aws_cdk as cdk

from hotel_reservation_stack import HotelReservationStack

app = cdk.App()
HotelReservationStack(
    app,
    "HotelReservationStack",
)

app.synth()

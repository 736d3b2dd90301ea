KAFKA_TOPICS = {
    "RIDE_STATUS_CHANGED": "petpaw.ride.status.changed",
    "ORDER_STATUS_CHANGED": "petpaw.order.status.changed",
    "DRIVER_LOCATION_UPDATE": "petpaw.driver.location",
    "RIDER_LOCATION_UPDATE": "petpaw.rider.location",
    "DEAD_LETTER_QUEUE": "petpaw.dlq",
}

LOCATION_TOPICS = (
    KAFKA_TOPICS["DRIVER_LOCATION_UPDATE"],
    KAFKA_TOPICS["RIDER_LOCATION_UPDATE"],
)


# Event Types
class EventTypes:
    RIDE_REQUESTED = "ride_requested"
    RIDE_ACCEPTED = "ride_accepted"
    RIDE_STARTED = "ride_started"
    RIDE_COMPLETED = "ride_completed"
    RIDE_CANCELLED = "ride_cancelled"
    ORDER_PLACED = "order_placed"
    ORDER_ACCEPTED = "order_accepted"
    RIDER_ACCEPTED = "rider_accepted"
    ORDER_ON_THE_WAY = "order_on_the_way"
    ORDER_DELIVERED = "order_delivered"
    ORDER_CANCELLED = "order_cancelled"

    RIDE_STATUS_EVENTS = {
        "PENDING": RIDE_REQUESTED,
        "ACCEPTED": RIDE_ACCEPTED,
        "IN_PROGRESS": RIDE_STARTED,
        "COMPLETED": RIDE_COMPLETED,
        "CANCELLED": RIDE_CANCELLED,
    }

    ORDER_STATUS_EVENTS = {
        "PENDING": ORDER_PLACED,
        "ACCEPTED": ORDER_ACCEPTED,
        "RIDER_ACCEPTED": RIDER_ACCEPTED,
        "ON_THE_WAY": ORDER_ON_THE_WAY,
        "DELIVERED": ORDER_DELIVERED,
        "CANCELLED": ORDER_CANCELLED,
    }

    CHOICES = [
        (RIDE_REQUESTED, "Ride Requested"),
        (RIDE_ACCEPTED, "Ride Accepted"),
        (RIDE_STARTED, "Ride Started"),
        (RIDE_COMPLETED, "Ride Completed"),
        (RIDE_CANCELLED, "Ride Cancelled"),
        (ORDER_PLACED, "Order Placed"),
        (ORDER_ACCEPTED, "Order Accepted"),
        (RIDER_ACCEPTED, "Rider Accepted"),
        (ORDER_ON_THE_WAY, "Order On The Way"),
        (ORDER_DELIVERED, "Order Delivered"),
        (ORDER_CANCELLED, "Order Cancelled"),
    ]

CUSTOMER_SUBJECT = "Appointment Confirmation"

ADMIN_SUBJECT = "New Appointment Booking"

CUSTOMER_HTML = (
    "<p>Dear {name},</p>\n"
    "<p>Your appointment for <strong>{service}</strong> has been confirmed.</p>\n"
    "<p><strong>Date:</strong> {date}</p>\n"
    "<p><strong>Time:</strong> {time}</p>\n"
    '<img src="{image_url}" alt="Appointment Confirmation" '
    'style="width:100%;max-width:600px;display:block;margin-top:10px; height:auto;">\n'
    "<p>We look forward to seeing you!</p>"
)

ADMIN_HTML = (
    "<p>A new appointment has been booked:</p>\n"
    "<p><strong>Name:</strong> {name}</p>\n"
    "<p><strong>Email:</strong> {email}</p>\n"
    "<p><strong>Phone:</strong> {mobile}</p>\n"
    "<p><strong>Date:</strong> {date}</p>\n"
    "<p><strong>Time:</strong> {time}</p>\n"
    "<p><strong>Service:</strong> {service}</p>"
)

app_name = "salon_booking"
app_title = "Salon Booking"
app_publisher = "Salon Booking Contributors"
app_description = "Horarios de atención, feriados y disponibilidad de citas para salones"
app_email = "dev@salon-booking.local"
app_license = "mit"

# Apps
# ------------------

# required_apps = []

# Includes in <head>
# ------------------

# include js, css files in header of desk.html
# app_include_css = "/assets/salon_booking/css/salon_booking.css"
# app_include_js = "/assets/salon_booking/js/salon_booking.js"

# include js in doctype views
# doctype_js = {"doctype" : "public/js/doctype.js"}
# doctype_calendar_js = {"doctype" : "public/js/doctype_calendar.js"}

# Installation
# ------------

# Carga los feriados por defecto (2024-2027)
after_install = "salon_booking.install.after_install"

# Uninstallation
# ------------

# before_uninstall = "salon_booking.uninstall.before_uninstall"
# after_uninstall = "salon_booking.uninstall.after_uninstall"

# Document Events
# ---------------
# Hook on document methods and events

# doc_events = {
# 	"*": {
# 		"on_update": "method",
# 		"on_cancel": "method",
# 		"on_trash": "method"
# 	}
# }

# Testing
# -------

before_tests = "salon_booking.install.before_tests"

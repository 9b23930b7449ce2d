"""Build-time settings for the ESC bridge."""

# ESC configuration
NUM_ESC = 8
ESC_PINS = (12, 13, 14, 15, 16, 17, 18, 19)
ESC_PWM_FREQUENCY = 400  # Hz
ESC_PWM_RESOLUTION = 16  # bits
ESC_BIDIRECTIONAL = True
ESC_MAX = 1900  # maximum forward throttle, microseconds
ESC_MID = 1500  # neutral throttle, microseconds
ESC_MIN = 1100  # maximum reverse throttle, microseconds

# Network features
WIFI_ENABLED = False
USE_WEBSERIAL = False

if USE_WEBSERIAL and not WIFI_ENABLED:
    raise RuntimeError("WebSerial requires WiFi to be enabled; set WIFI_ENABLED to True.")

# Task queues
MOTOR_QUEUE_SIZE = 10
SIGNALING_QUEUE_SIZE = 5
# backend/routes/tracking.py
from routes.common import choose, menu_action
from services import tracking as tracking_service
from utils.audit import write_log
from utils.display import id_number
from utils.permissions import Capability, require_capability


@menu_action
def view_tracking_info(db, prompter, session):
    number = prompter.prompt_line("Enter the tracking ID # of the order you'd like to view: ")
    t = tracking_service.view_tracking(db, session, number)

    prompter.say("Tracking Info details:")
    prompter.say(f"- Tracking ID: #{id_number(t.tracking_id)}")
    prompter.say(f"- Rental Order ID: #{id_number(t.rental_order_id)}")
    prompter.say(f"- Status: {t.status}")
    prompter.say(f"- Current Location: {t.current_location}")
    prompter.say(f"- Courier: {t.courier_name}")
    prompter.say(f"- Last Updated Date: {t.last_update_date}")
    prompter.say(f"- Additional Comments: {t.additional_comments}")
    return t


@menu_action
def update_tracking_info(db, prompter, session):
    require_capability(session, Capability.UPDATE_TRACKING)

    number = prompter.prompt_line("\nEnter trackingID to update: ")
    tracking_service.get_tracking(db, number)

    field = choose(prompter, "", [
        ("status", "Update Status"),
        ("location", "Update Location"),
        ("courier", "Update Courier"),
        ("comments", "Update Additional Comments"),
    ])
    if field is None:
        prompter.say("Invalid choice.\n")
        return None

    value = prompter.prompt_line(f"Enter the updated {field}: ")
    t = tracking_service.update_tracking(db, session, number, field, value)

    write_log(db, user_login=session.login, action="TRACKING_UPDATE", resource="tracking",
              status="SUCCESS", meta={"tracking_id": t.tracking_id, "field": field})
    prompter.say("Tracking information successfully updated.\n")
    return t

from http import HTTPStatus

HTTP_STATUS: dict[int, str] = {_.value: _.phrase for _ in HTTPStatus}


def statusMessage(status: int) -> str:
	return HTTP_STATUS.get(status, "Unknown status")


# EOF

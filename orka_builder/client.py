import requests
import logging
import time
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

# Image commit/save copies whole disks on the Orka side and can be very slow.
IMAGE_REQUEST_TIMEOUT = 30 * 60

ORKA_API_REQUEST_ERROR = "Orka API request failed"
ORKA_API_RESPONSE_ERROR = "Orka API response error"

IMAGE_COMMIT_PATH = 'resources/image/commit'
IMAGE_SAVE_PATH = 'resources/image/save'

# Bodies are small JSON documents, read a byte at a time so the deadline is checked as data arrives
BODY_CHUNK_SIZE = 1


class OrkaAPIError(Exception):
    pass


class OrkaRequestError(OrkaAPIError):
    """The request did not complete (connection error, timeout, deadline exceeded)."""

    def __init__(self, reason):
        self.reason = reason
        super().__init__(f"{ORKA_API_REQUEST_ERROR} [{reason}]")


class OrkaResponseError(OrkaAPIError):
    """The API answered with a status other than 200."""

    def __init__(self, status_code, status):
        self.status_code = status_code
        self.status = status
        super().__init__(f"{ORKA_API_RESPONSE_ERROR} [{status}]")


# Wire models
class ImageCommitRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    vmid: str = Field(alias='VMID')


class ImageSaveRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    vmid: str = Field(alias='VMID')
    image_name: str = Field(alias='ImageName')


class ImageResponse(BaseModel):
    message: str = ''
    # HTTP status line of the response, filled in by the client
    status: str = Field(default='', exclude=True)


class ImageCommitResponse(ImageResponse):
    pass


class ImageSaveResponse(ImageResponse):
    pass


class OrkaClient:
    def __init__(self, endpoint, token, timeout=IMAGE_REQUEST_TIMEOUT):
        """
        Initialize the Orka API client.

        :param endpoint: Orka API base URL (e.g., 'http://10.221.188.100')
        :param token: Bearer token for the Orka API
        :param timeout: Deadline in seconds for the whole round trip. It is checked
                        after every body read; a single stalled socket read is
                        bounded by the same value
        """
        self.endpoint = endpoint.rstrip('/')
        self.token = token
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            'Authorization': f'Bearer {token}',
            'Content-Type': 'application/json'
        })

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        self.session.close()

    def _post(self, path, data=None):
        """
        Perform a POST request to the API.

        Any status other than 200 is an error. The response body is returned
        undecoded since callers decode it on a best-effort basis.

        :param path: API path relative to the endpoint
        :param data: JSON data to send
        :return: (status line, body bytes)
        """
        url = f"{self.endpoint}/{path}"
        logger.info(f"POST {url}")
        deadline = time.monotonic() + self.timeout
        try:
            resp = self.session.post(url, json=data, timeout=self.timeout, stream=True)
            status = f"{resp.status_code} {resp.reason}"
            if resp.status_code != 200:
                resp.close()
                logger.error(f"POST {url} returned {status}")
                raise OrkaResponseError(resp.status_code, status)
            body = self._read_body(resp, deadline)
        except requests.exceptions.Timeout as e:
            logger.error(f"POST {url} timed out after {self.timeout} seconds")
            raise OrkaRequestError(e) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"POST {url} failed: {e}")
            raise OrkaRequestError(e) from e
        return status, body

    def _check_deadline(self, deadline):
        if time.monotonic() > deadline:
            raise requests.exceptions.Timeout(f"no complete response within {self.timeout} seconds")

    def _read_body(self, resp, deadline):
        chunks = []
        try:
            for chunk in resp.iter_content(chunk_size=BODY_CHUNK_SIZE):
                chunks.append(chunk)
                self._check_deadline(deadline)
            # Headers alone may have used up the deadline
            self._check_deadline(deadline)
        finally:
            resp.close()
        return b''.join(chunks)

    def _decode(self, body, model):
        try:
            return model.model_validate_json(body)
        except ValidationError as e:
            logger.debug(f"Ignoring undecodable response body: {e}")
            return model()

    def image_commit(self, vmid) -> ImageCommitResponse:
        """
        Commit the image attached to a VM back in place.

        :param vmid: VM ID
        :return: ImageCommitResponse
        """
        request = ImageCommitRequest(vmid=vmid)
        status, body = self._post(IMAGE_COMMIT_PATH, request.model_dump(by_alias=True))
        result = self._decode(body, ImageCommitResponse)
        result.status = status
        logger.info(f"Image for VM {vmid} committed")
        return result

    def image_save(self, vmid, image_name) -> ImageSaveResponse:
        """
        Save the current state of a VM as a new named image.

        :param vmid: VM ID
        :param image_name: Name of the new image
        :return: ImageSaveResponse
        """
        request = ImageSaveRequest(vmid=vmid, image_name=image_name)
        status, body = self._post(IMAGE_SAVE_PATH, request.model_dump(by_alias=True))
        result = self._decode(body, ImageSaveResponse)
        result.status = status
        logger.info(f"VM {vmid} saved as image {image_name}")
        return result


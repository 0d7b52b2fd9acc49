import logging

from .client import IMAGE_REQUEST_TIMEOUT, OrkaAPIError, OrkaClient
from .state import ImageResult, StepAction, StepContext

logger = logging.getLogger(__name__)


class StepCreateImage:
    """
    Persist the disk of the build VM as an Orka image.

    With pre-copy the VM already runs on a copy of the target image, so the
    image is committed back in place. Otherwise the VM is saved as a new
    image named by the config.
    """

    def run(self, context: StepContext) -> StepAction:
        config = context.config
        ui = context.ui
        vmid = context.vmid

        if config.skip_image_creation:
            ui.say("Skipping image creation because of 'no_create_image' being set")
            return StepAction.CONTINUE

        ui.say(f"Image creation is using VM ID [{vmid}]")
        ui.say(f"Image name is [{config.image_name}]")

        # context.cancelled is not checked while the request is in flight
        with OrkaClient(config.endpoint, context.token, timeout=IMAGE_REQUEST_TIMEOUT) as client:
            if config.use_precopy:
                ui.say("Committing existing image since pre-copy is being used")
                ui.say("Please wait as this can take a little while...")
                try:
                    response = client.image_commit(vmid)
                except OrkaAPIError as e:
                    return self._halt(context, ImageResult.commit_failed(e))
                ui.say(f"Image committed [{response.status}] [{response.message}]")
            else:
                ui.say(f"Saving new image [{config.image_name}]")
                ui.say("Please wait as this can take a little while...")
                try:
                    response = client.image_save(vmid, config.image_name)
                except OrkaAPIError as e:
                    return self._halt(context, ImageResult.save_failed(e))
                ui.say(f"Image saved [{response.status}] [{response.message}]")

        context.image_result = ImageResult.ok()
        return StepAction.CONTINUE

    def _halt(self, context, result):
        context.image_result = result
        context.error = result.error
        context.ui.error(str(result.error))
        return StepAction.HALT

    def cleanup(self, context: StepContext) -> None:
        result = context.image_result
        if result is not None and result.failed:
            # TODO: offer an opt-in flag to delete the half-written image automatically
            logger.warning(f"Image step failed ({result.kind.value}) for VM {context.vmid}: {result.error}")
            context.ui.say("Commit or save failed - please check Orka to see if any artifacts were left behind")
            return

        if not context.cancelled and not context.halted:
            return

        if not context.vmid:
            return

        logger.debug(f"Build stopped with VM {context.vmid}; nothing to clean up for the image step")

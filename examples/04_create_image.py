"""04 - Create an image from a prompt."""

from aionic import ImageClient, ImageSize

client = ImageClient().set_size(ImageSize(512, 512)).set_max_images(2)

for url in client.create("A watercolor otter reading a newspaper"):
    print(url)

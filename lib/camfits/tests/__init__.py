import os
import shutil
import tempfile
import warnings

import numpy as np

from camfits.header import Header
from camfits.util import encode_ascii


class CamfitsTestCase(object):
    def setup_method(self, method):
        self.temp_dir = tempfile.mkdtemp(prefix='camfits-test-')

        warnings.resetwarnings()
        warnings.simplefilter('always', UserWarning)

    def teardown_method(self, method):
        shutil.rmtree(self.temp_dir)

    def temp(self, filename):
        """ Returns the full path to a file in the test temp dir."""

        return os.path.join(self.temp_dir, filename)

    def make_fits(self, cards, data=b'', pad=True):
        """
        Returns the bytes of a FITS file with the given header cards and raw
        pixel data.
        """

        header = Header(cards)
        if pad:
            data = data + b'\0' * ((2880 - len(data) % 2880) % 2880)
        return encode_ascii(header.tostring()) + data

    def arange_pixels(self, w, h, start=0, step=1):
        return ((np.arange(w * h) * step + start) % 65536).astype(
            np.uint16).reshape((h, w))

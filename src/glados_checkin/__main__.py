"""GLaDOS 签到主入口"""

import sys

from glados_checkin.run import main


if __name__ == "__main__":
    sys.exit(main())
